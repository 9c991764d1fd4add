# newsdesk/data_manager/local_storage.py
from typing import Optional


class LocalStorage:
    """
    Named text slots, same contract as the browser's localStorage:
    every read and write replaces the whole value of one key.
    """

    def __init__(self, conn, table: str = "local_storage"):
        self.conn = conn
        self.table = table

    def get_item(self, key: str) -> Optional[str]:
        row = self.conn.execute(
            f"SELECT value FROM {self.table} WHERE key=?", [key]
        ).fetchone()
        return None if row is None else row[0]

    def set_item(self, key: str, value: str) -> None:
        self.conn.execute(
            f"INSERT INTO {self.table} (key, value) VALUES (?, ?) "
            f"ON CONFLICT (key) DO UPDATE SET value = excluded.value",
            [key, value],
        )
