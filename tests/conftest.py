import pytest

from sqlalchemy import create_engine, text
from sqlalchemy.ext.asyncio import create_async_engine

from sqlstruct import SQLAlchemyHandle
from sqlstruct.asyncio import AsyncSQLAlchemyHandle
from sqlstruct.base.schema import clear_cache

SCHEMA = [
    'CREATE TABLE "user" (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL)',
    'CREATE TABLE "customer" (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT, address_street TEXT, address_city TEXT)',
    'CREATE TABLE "profile" (id INTEGER PRIMARY KEY AUTOINCREMENT, address_street TEXT, address_city TEXT)',
    'CREATE TABLE "membership" (user_id INTEGER, group_id INTEGER, role TEXT, PRIMARY KEY (user_id, group_id))',
    """CREATE TABLE "article" (id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT, status TEXT DEFAULT 'draft')""",
    'CREATE TABLE "only_key" (id INTEGER PRIMARY KEY AUTOINCREMENT)',
]


class AsyncHandle:
    """
    Awaitable facade over a synchronous handle
    """
    def __init__(self, handle):
        self.handle = handle

    async def execute(self, query, args=()):
        return self.handle.execute(query, args)

    async def query(self, query, args=()):
        return self.handle.query(query, args)

    async def query_row(self, query, args=()):
        return self.handle.query_row(query, args)


@pytest.fixture(autouse=True)
def schema_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def connection():
    engine = create_engine("sqlite://")

    with engine.connect() as conn:
        for ddl in SCHEMA:
            conn.execute(text(ddl))
        yield conn

    engine.dispose()


@pytest.fixture
def db(connection):
    return SQLAlchemyHandle(connection)


@pytest.fixture
def async_db(db):
    return AsyncHandle(db)


@pytest.fixture
async def async_connection():
    engine = create_async_engine("sqlite+aiosqlite://")

    async with engine.connect() as conn:
        for ddl in SCHEMA:
            await conn.execute(text(ddl))
        yield conn

    await engine.dispose()


@pytest.fixture
def sqlite_async_db(async_connection):
    return AsyncSQLAlchemyHandle(async_connection)
