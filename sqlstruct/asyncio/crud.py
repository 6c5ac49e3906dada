from ..exceptions import InvalidArgument, NotFound
from ..helpers.utils import is_record_type, new_record
from ..logger import logger
from ..base.rows import scan_row, scan_values
from ..base.schema import extract_table
from ..base.statements import delete_statement, insert_statement, load_statement, update_statement


async def insert(db, table_name, record):
    statement = insert_statement(extract_table(record), table_name)

    if not statement.targets:
        await db.execute(statement.sql, statement.args)
        return

    row = await db.query_row(statement.sql, statement.args)
    scan_values(row, statement.targets)


async def update(db, table_name, record):
    statement = update_statement(extract_table(record), table_name)
    if statement is None:
        logger.debug(f"Nothing to update for {type(record).__name__}, skipping")
        return

    await db.execute(statement.sql, statement.args)


async def delete(db, table_name, record):
    statement = delete_statement(extract_table(record), table_name)
    await db.execute(statement.sql, statement.args)


async def load(db, table_name, record, *key):
    statement = load_statement(extract_table(record), table_name, key)
    row = await db.query_row(statement.sql, statement.args)
    scan_values(row, statement.targets)
    return record


async def query_row(db, record, query, *args):
    table = extract_table(record)

    rows = await db.query(query, args)
    try:
        return scan_row(rows, record, table)
    finally:
        rows.close()


async def query_all(db, record_type, query, *args):
    if not is_record_type(record_type):
        raise InvalidArgument(f"sqlstruct.QueryAll: expected a dataclass type; got {record_type!r}")

    records = []
    rows = await db.query(query, args)
    try:
        while True:
            try:
                records.append(scan_row(rows, new_record(record_type)))
            except NotFound:
                return records
    finally:
        rows.close()
