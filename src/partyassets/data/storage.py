import sqlite3
from pathlib import Path


class Database:
    """
    Thin wrapper over sqlite3 for asset persistence.
    Keeps schema creation in one place.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self):
        return sqlite3.connect(self.db_path, detect_types=sqlite3.PARSE_DECLTYPES)

    def _ensure_schema(self):
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS assets (
                    id TEXT PRIMARY KEY,
                    asset_id TEXT NOT NULL UNIQUE,
                    party_id TEXT NOT NULL,
                    origin TEXT,
                    type TEXT NOT NULL,
                    issued TEXT NOT NULL,
                    valid_to TEXT,
                    status TEXT NOT NULL,
                    status_reason TEXT,
                    description TEXT,
                    case_reference_ids_json TEXT NOT NULL,
                    additional_parameters_json TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );
                """
            )
            cur.execute("CREATE INDEX IF NOT EXISTS idx_assets_party ON assets (party_id);")
            conn.commit()
