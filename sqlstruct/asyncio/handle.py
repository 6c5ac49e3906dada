from ..base.handle import SQLAlchemyHandle


class AsyncSQLAlchemyHandle:
    """
    Awaitable ``DB`` over a SQLAlchemy ``AsyncConnection``.

    Results come back buffered, so rows are scanned without further awaiting.
    """
    def __init__(self, connection):
        self.connection = connection

    async def execute(self, query, args=()):
        return await self.connection.execute(*SQLAlchemyHandle._prepare(query, args))

    async def query(self, query, args=()):
        return await self.connection.execute(*SQLAlchemyHandle._prepare(query, args))

    async def query_row(self, query, args=()):
        result = await self.connection.execute(*SQLAlchemyHandle._prepare(query, args))
        return result.first()
