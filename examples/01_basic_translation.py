"""
Example 01: Basic Translation

This example demonstrates filling display fields from an enum, an in-memory
dictionary and a SQLite lookup table with one TranslationEngine.
"""

from __future__ import annotations

import sqlite3
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

from response_translate import (
    ConnectionConfig,
    MemoryDictionaryCache,
    SqlTableStore,
    TranslateField,
    TranslationEngine,
    build_default_registry,
)


class UserStatus(Enum):
    DISABLED = (0, "Disabled")
    ENABLED = (1, "Enabled")

    def __init__(self, code, desc):
        self.code = code
        self.desc = desc


@dataclass
class UserView:
    name: str
    status: Annotated[int, TranslateField("enum", target="status_name", enum_type=UserStatus)]
    dept_code: Annotated[
        Optional[str],
        TranslateField("cache", target="dept_name", dict_key="dept", fallback="Unknown"),
    ]
    org_id: Annotated[
        Optional[int],
        TranslateField("table", target="org_name", table="org", key_column="id", value_column="name"),
    ]
    status_name: Optional[str] = None
    dept_name: Optional[str] = None
    org_name: Optional[str] = None


def main():
    # Create a temporary database with a lookup table
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.execute("CREATE TABLE org (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
    conn.execute("INSERT INTO org (id, name) VALUES (10, 'Alpha'), (20, 'Beta')")
    conn.commit()
    conn.close()

    # Dictionary entries normally come from a shared cache or a config table
    cache = MemoryDictionaryCache()
    cache.load_dictionary("dept", {"ENG": "Engineering", "HR": "Human Resources"})

    store = SqlTableStore.from_config(ConnectionConfig(driver="sqlite", database=db_path))
    engine = TranslationEngine(build_default_registry(cache=cache, table_store=store))

    users = [
        UserView("alice", status=1, dept_code="ENG", org_id=10),
        UserView("bob", status=0, dept_code="X9", org_id=20),
        UserView("carol", status=1, dept_code="HR", org_id=30),
    ]

    print("=== Basic Translation ===\n")

    # One call translates the whole list: one lookup per strategy
    engine.translate(users)
    for user in users:
        print(f"  - {user.name}: {user.status_name}, {user.dept_name}, org {user.org_name}")
    print()

    # Clean up
    store.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
