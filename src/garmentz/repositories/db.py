# Rev 0.3.1

"""SQLite connection & migration runner (Rev 0.3.1)
- sqlite3.Row rows, WAL for file databases, foreign_keys=ON
- Migrations are the .sql files shipped in garmentz/data/migrations, applied
  in lexical order; each file and its schema_migrations row commit together
"""
from __future__ import annotations
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from garmentz.utils.paths import DB_PATH, MIGRATIONS_DIR

log = logging.getLogger(__name__)

MEMORY = ":memory:"


class Database:
    def __init__(self, path: Path | str = DB_PATH) -> None:
        self.path = Path(path) if str(path) != MEMORY else None
        if self.path is not None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(
            str(self.path) if self.path is not None else MEMORY,
            isolation_level=None,
            check_same_thread=False,
        )
        self.conn.row_factory = sqlite3.Row
        if self.path is not None:
            self.conn.execute("PRAGMA journal_mode=WAL;")
        self.conn.execute("PRAGMA foreign_keys=ON;")
        self.conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_migrations (filename TEXT PRIMARY KEY, applied_at TEXT NOT NULL)"
        )
        log.info("SQLite open %s", self.path or MEMORY)

    def close(self) -> None:
        try:
            self.conn.close()
        except sqlite3.Error:
            log.warning("Error closing %s", self.path or MEMORY, exc_info=True)

    def applied(self) -> set[str]:
        return {r["filename"] for r in self.conn.execute("SELECT filename FROM schema_migrations")}

    def pending(self, migrations_dir: Path = MIGRATIONS_DIR) -> List[Path]:
        done = self.applied()
        return [p for p in sorted(Path(migrations_dir).glob("*.sql")) if p.name not in done]

    def _apply(self, p: Path) -> None:
        sql = p.read_text(encoding="utf-8")
        stamp = datetime.now(timezone.utc).isoformat()
        # executescript commits on entry, so the BEGIN/COMMIT pair lives inside the script
        script = (
            "BEGIN;\n"
            f"{sql}\n;\n"
            f"INSERT INTO schema_migrations(filename, applied_at) VALUES ('{p.name}', '{stamp}');\n"
            "COMMIT;"
        )
        try:
            self.conn.executescript(script)
        except sqlite3.Error:
            if self.conn.in_transaction:
                self.conn.execute("ROLLBACK")
            log.error("Migration %s failed; rolled back", p.name)
            raise

    def run_migrations(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        todo = self.pending(migrations_dir)
        for p in todo:
            self._apply(p)
            log.info("Applied migration %s", p.name)
        return [p.name for p in todo]
