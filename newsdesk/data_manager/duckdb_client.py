# newsdesk/data_manager/duckdb_client.py
from pathlib import Path

import duckdb

from newsdesk.utils.paths import LOCAL_DB

DDL_LOCAL_STORAGE = """
CREATE TABLE IF NOT EXISTS local_storage (
    key   TEXT PRIMARY KEY,
    value TEXT
);
"""

class DuckDBClient:
    """DuckDB connection plus schema creation. ':memory:' is accepted for tests."""

    def __init__(self, db_path=LOCAL_DB):
        if str(db_path) == ":memory:":
            self.conn = duckdb.connect(":memory:")
        else:
            path = Path(db_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self.conn = duckdb.connect(str(path))
        self._ensure_schema()

    def _ensure_schema(self):
        self.conn.execute(DDL_LOCAL_STORAGE)

    def close(self):
        self.conn.close()
