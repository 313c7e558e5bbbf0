from __future__ import annotations

import re
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

import mysql.connector

from ..core.exceptions import PersistenceError


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "timeclock_db")),
    )


@contextmanager
def _server(target: DBTarget, *, use_database: bool = True) -> Iterator:
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if use_database:
        kwargs["database"] = target.database
    try:
        conn = mysql.connector.connect(**kwargs)
    except mysql.connector.Error as e:
        raise PersistenceError(str(e)) from e
    try:
        yield conn
    except mysql.connector.Error as e:
        raise PersistenceError(str(e)) from e
    finally:
        conn.close()


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql names a default database; the configured one wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema file on ``;``, ignoring ``--`` comment lines and quoted semicolons."""
    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    buf: list[str] = []
    quote = ""
    escape = False

    for ch in "\n".join(lines):
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    with _server(target, use_database=False) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database and every table in ``schema_path``; returns the statement count."""
    ensure_database_exists(db_config)
    statements = list(iter_sql_statements(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))))

    with _server(_as_target(db_config)) as conn:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    return len(statements)


def list_tables(db_config: dict) -> list[str]:
    with _server(_as_target(db_config)) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
