from .base.crud import insert, update, delete, load, query_row, query_all
from .base.handle import DB, SQLAlchemyHandle
from .base.schema import extract, extract_table, schema_for
from .base.statements import quote, placeholder, placeholders
from .base.table import Column, Table
from .base.tags import column
from .exceptions import SQLStructError, InvalidArgument, NoPrimaryKey, NotFound

__all__ = [
    "insert",
    "update",
    "delete",
    "load",
    "query_row",
    "query_all",
    "DB",
    "SQLAlchemyHandle",
    "extract",
    "extract_table",
    "schema_for",
    "quote",
    "placeholder",
    "placeholders",
    "Column",
    "Table",
    "column",
    "SQLStructError",
    "InvalidArgument",
    "NoPrimaryKey",
    "NotFound",
]

__version__ = '0.1.0'
