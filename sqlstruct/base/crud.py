from ..exceptions import InvalidArgument, NotFound
from ..helpers.utils import is_record_type, new_record
from ..logger import logger
from .rows import scan_row, scan_values
from .schema import extract_table
from .statements import delete_statement, insert_statement, load_statement, update_statement


def insert(db, table_name, record):
    """
    Insert ``record``. Server-generated primary keys are written back onto it.
    """
    statement = insert_statement(extract_table(record), table_name)

    if not statement.targets:
        db.execute(statement.sql, statement.args)
        return

    row = db.query_row(statement.sql, statement.args)
    scan_values(row, statement.targets)


def update(db, table_name, record):
    statement = update_statement(extract_table(record), table_name)
    if statement is None:
        logger.debug(f"Nothing to update for {type(record).__name__}, skipping")
        return

    db.execute(statement.sql, statement.args)


def delete(db, table_name, record):
    statement = delete_statement(extract_table(record), table_name)
    db.execute(statement.sql, statement.args)


def load(db, table_name, record, *key):
    """
    Load the row matching ``key`` (one value per primary key column) into ``record``.

    Raises ``NotFound`` when no row matches.
    """
    statement = load_statement(extract_table(record), table_name, key)
    row = db.query_row(statement.sql, statement.args)
    scan_values(row, statement.targets)
    return record


def query_row(db, record, query, *args):
    table = extract_table(record)

    rows = db.query(query, args)
    try:
        return scan_row(rows, record, table)
    finally:
        rows.close()


def query_all(db, record_type, query, *args):
    """
    Run ``query`` and return one new ``record_type`` instance per row.
    """
    if not is_record_type(record_type):
        raise InvalidArgument(f"sqlstruct.QueryAll: expected a dataclass type; got {record_type!r}")

    records = []
    rows = db.query(query, args)
    try:
        while True:
            try:
                records.append(scan_row(rows, new_record(record_type)))
            except NotFound:
                return records
    finally:
        rows.close()
