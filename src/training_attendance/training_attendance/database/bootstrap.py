"""Applies ``database/schema.sql`` to the configured MySQL server."""
from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

# Quoted literals are matched whole so a ';' inside them never splits a statement.
_SQL_TOKEN = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|;|[^'\";]+|['\"]", re.S)
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")
_DATABASE_DIRECTIVE = re.compile(r"(?im)^\s*(?:CREATE\s+DATABASE|USE)\b[^;]*;")


def clean_schema(sql: str) -> str:
    """Drop comment lines and CREATE DATABASE / USE so the schema targets DB_CONFIG's database."""
    return _DATABASE_DIRECTIVE.sub("", _LINE_COMMENT.sub("", sql))


def iter_sql_statements(sql: str) -> Iterator[str]:
    current: list[str] = []
    for match in _SQL_TOKEN.finditer(sql):
        token = match.group(0)
        if token != ";":
            current.append(token)
            continue
        statement = "".join(current).strip()
        current = []
        if statement:
            yield statement
    statement = "".join(current).strip()
    if statement:
        yield statement


def ensure_database_exists(config: DBConfig) -> None:
    with closing(DatabaseConnection(config).connect(with_database=False)) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{config.database}` "
                "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database and its tables if missing. Returns the number of statements executed."""
    config = DBConfig.from_dict(db_config)
    ensure_database_exists(config)
    statements = list(iter_sql_statements(clean_schema(Path(schema_path).read_text(encoding="utf-8"))))

    with closing(DatabaseConnection(config).connect()) as conn:
        with closing(conn.cursor()) as cur:
            for statement in statements:
                cur.execute(statement)
        conn.commit()

    logger.info("Applied %d schema statements to %s@%s/%s", len(statements), config.user, config.host, config.database)
    return len(statements)


def list_tables(db_config: dict) -> list[str]:
    with closing(DatabaseConnection(DBConfig.from_dict(db_config)).connect()) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute("SHOW TABLES")
            return sorted(row[0] for row in cur.fetchall())
