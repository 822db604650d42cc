import logging
from typing import Optional, Protocol
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from partyassets.domain.models import PartyType
from partyassets.exceptions import ConfigError, IntegrationError

logger = logging.getLogger(__name__)


class PartyLookup(Protocol):
    def get_party_id(self, party_type: PartyType, legal_id: str) -> Optional[str]:
        ...


class PartyClient:
    """
    Resolves a legal id (personal or organization number) to a stable party id
    using the Party service.
    """

    PARTY_ID_PATH = "/{municipality_id}/{party_type}/{legal_id}/partyId"

    def __init__(
        self,
        base_url: str,
        municipality_id: str,
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff_seconds: float = 0.5,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ConfigError("Party base_url must be configured.")
        self.base_url = base_url.rstrip("/")
        self.municipality_id = municipality_id
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            retries = Retry(
                total=max_retries,
                backoff_factor=backoff_seconds,
                status_forcelist=[429, 500, 502, 503, 504],
                allowed_methods=["GET"],
                raise_on_status=False,
            )
            session.mount("http://", HTTPAdapter(max_retries=retries))
            session.mount("https://", HTTPAdapter(max_retries=retries))
        self.session = session

    def get_party_id(self, party_type: PartyType, legal_id: str) -> Optional[str]:
        url = self.base_url + self.PARTY_ID_PATH.format(
            municipality_id=self.municipality_id,
            party_type=party_type.value,
            legal_id=quote(legal_id, safe=""),
        )
        try:
            resp = self.session.get(url, headers={"Accept": "text/plain"}, timeout=self.timeout)
        except requests.RequestException as exc:
            raise IntegrationError(f"Party lookup failed: {exc}") from exc

        if resp.status_code == 404:
            return None
        if resp.status_code != 200:
            logger.warning(
                "party lookup returned unexpected status",
                extra={"status": resp.status_code, "party_type": party_type.value},
            )
            raise IntegrationError(f"Party lookup failed: {resp.status_code}")

        party_id = resp.text.strip().strip('"')
        return party_id or None
