"""
Thin SQL executor used by the CRUD modules.

Statements are written with positional placeholders ($1, $2, ...) and run
through sqlalchemy.text() on the request's Session. Rows come back as plain
dicts keyed by the projection's JSON names.

Database errors are not translated: the session is rolled back and the
SQLAlchemyError propagates to the route layer.
"""

import logging
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.crud.sql import WhereClause, bind_positional

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class TableSpec(NamedTuple):
    """
    Table name, key column and the (column, json name) pairs to return.
    """
    name: str
    key: str
    projection: Tuple[Tuple[str, str], ...]

    @property
    def columns_sql(self) -> str:
        return ", ".join(
            column if column == alias else f'{column} AS "{alias}"'
            for column, alias in self.projection
        )


class SqlStore:
    """
    Executes one statement per call against a SQLAlchemy session.
    """

    def __init__(self, db: Session):
        self.db = db

    def fetch_all(self, sql: str, values: Sequence[Any] = ()) -> List[Row]:
        statement, params = bind_positional(sql, values)
        result = self.db.execute(text(statement), params)
        return [dict(row) for row in result.mappings().all()]

    def write(self, sql: str, values: Sequence[Any] = ()) -> Optional[Row]:
        """Run a statement with RETURNING, commit, and return the first row."""
        statement, params = bind_positional(sql, values)
        try:
            result = self.db.execute(text(statement), params)
            row = result.mappings().first()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database write failed: {e}")
            raise
        return dict(row) if row is not None else None

    def insert(self, table: TableSpec, columns: Sequence[str], values: Sequence[Any]) -> Row:
        placeholders = ", ".join(f"${idx}" for idx in range(1, len(values) + 1))
        return self.write(
            f"""INSERT INTO {table.name} ({", ".join(columns)})
                VALUES ({placeholders})
                RETURNING {table.columns_sql}""",
            values
        )

    def select_one(self, table: TableSpec, key: Any) -> Optional[Row]:
        rows = self.fetch_all(
            f"""SELECT {table.columns_sql}
                FROM {table.name}
                WHERE {table.key} = $1""",
            [key]
        )
        return rows[0] if rows else None

    def select_where(self, table: TableSpec, where: WhereClause, order_by: str) -> List[Row]:
        return self.fetch_all(
            f"""SELECT {table.columns_sql}
                FROM {table.name}
                {where.clause}
                ORDER BY {order_by}""",
            where.values
        )

    def update_by_key(self, table: TableSpec, set_clause: str, values: Sequence[Any], key: Any) -> Optional[Row]:
        # Key is bound after the SET values
        key_idx = len(values) + 1
        return self.write(
            f"""UPDATE {table.name}
                SET {set_clause}
                WHERE {table.key} = ${key_idx}
                RETURNING {table.columns_sql}""",
            [*values, key]
        )

    def delete_by_key(self, table: TableSpec, key: Any) -> bool:
        row = self.write(
            f"""DELETE FROM {table.name}
                WHERE {table.key} = $1
                RETURNING {table.key}""",
            [key]
        )
        return row is not None
