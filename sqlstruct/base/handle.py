from typing import Any, Protocol, Sequence

from sqlalchemy import text

from ..logger import logger
from ..helpers.utils import to_named_params


class DB(Protocol):
    """
    The execution handle CRUD operations run against.

    ``query`` returns a result exposing ``keys()``, ``fetchone()`` and ``close()``;
    ``query_row`` returns a single positional row or ``None``.
    """
    def execute(self, query: str, args: Sequence[Any] = ()) -> Any: ...

    def query(self, query: str, args: Sequence[Any] = ()) -> Any: ...

    def query_row(self, query: str, args: Sequence[Any] = ()) -> Any: ...


class SQLAlchemyHandle:
    """
    ``DB`` over a SQLAlchemy ``Connection``.

    ``$n`` placeholders are rewritten into named binds so statements run on any
    SQLAlchemy dialect. Transactions stay with the caller's connection.

    The rewrite is purely textual: a ``$n`` inside a string literal is rewritten
    too, and ``text()`` reads any literal ``:word`` in the query as a bind.
    Pass such values as arguments instead.
    """
    def __init__(self, connection):
        self.connection = connection

    @staticmethod
    def _prepare(query, args):
        sql, params = to_named_params(query, args)
        logger.debug(f"Executing {sql} with {params}")
        return text(sql), params

    def execute(self, query, args=()):
        return self.connection.execute(*self._prepare(query, args))

    def query(self, query, args=()):
        return self.connection.execute(*self._prepare(query, args))

    def query_row(self, query, args=()):
        return self.connection.execute(*self._prepare(query, args)).first()
