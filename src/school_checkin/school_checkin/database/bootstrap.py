from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from ..staff.model import StaffMember
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql names a database; the configured one wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    return re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split on ';' outside quotes and '--' comment lines."""

    buf: list[str] = []
    quote = None
    escape = False

    for line in sql.splitlines(keepends=True):
        if quote is None and line.lstrip().startswith("--"):
            continue
        for ch in line:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif quote and ch == quote:
                quote = None
            elif not quote and ch in ("'", '"'):
                quote = ch
            elif not quote and ch == ";":
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                continue
            buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: Mapping) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = DatabaseConnection(target).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect()
    try:
        cur = conn.cursor()
        applied = 0
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            applied += 1
        conn.commit()
        logger.debug("applied %d schema statements from %s", applied, schema_path)
    finally:
        conn.close()


def seed_staff(db_config: Mapping, staff: Sequence[StaffMember]) -> int:
    """Insert the default staff list, keeping rows that already exist."""

    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.executemany(
            "INSERT IGNORE INTO staff (staff_id, name, role, birthday) VALUES (%s, %s, %s, %s)",
            [(m.staff_id, m.name, m.role, m.birthday) for m in staff],
        )
        conn.commit()
        return int(cur.rowcount or 0)
    finally:
        conn.close()


def list_tables(db_config: Mapping) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
