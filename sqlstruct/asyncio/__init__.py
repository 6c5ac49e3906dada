from .crud import insert, update, delete, load, query_row, query_all
from .handle import AsyncSQLAlchemyHandle

__all__ = [
    "AsyncSQLAlchemyHandle",
    "insert",
    "update",
    "delete",
    "load",
    "query_row",
    "query_all",
]
