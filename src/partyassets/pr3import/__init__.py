from partyassets.pr3import.importer import PR3Importer
from partyassets.pr3import.legal_id import add_century_digit, clean_legal_id, normalize_legal_id
from partyassets.pr3import.models import AssetDraft, ImportResult, Violation
from partyassets.pr3import.row import Column, SourceRow
from partyassets.pr3import.transformer import RowTransformer
from partyassets.pr3import.validation import validate_asset

__all__ = [
    "AssetDraft",
    "Column",
    "ImportResult",
    "PR3Importer",
    "RowTransformer",
    "SourceRow",
    "Violation",
    "add_century_digit",
    "clean_legal_id",
    "normalize_legal_id",
    "validate_asset",
]
