"""Column types shared by the database models."""

from typing import Any, Optional

from sqlalchemy import BigInteger, Integer
from sqlalchemy.types import TypeDecorator

from books_service.core.identifiers import Int64


class Int64Id(TypeDecorator):
    """64-bit identifier column that loads values as ``Int64``.

    SQLite only autoincrements ``INTEGER PRIMARY KEY`` columns, and its
    INTEGER is already 64-bit, so the SQLite variant is plain ``Integer``.
    """

    impl = BigInteger().with_variant(Integer(), "sqlite")
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> Optional[int]:
        if value is None:
            return None
        return int(value)

    def process_result_value(self, value: Any, dialect) -> Optional[Int64]:
        if value is None:
            return None
        return Int64(value)
