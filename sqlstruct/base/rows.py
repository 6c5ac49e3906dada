from ..exceptions import NotFound
from ..logger import logger
from .schema import extract_table


class _Discard:
    """
    Scan target for result columns with no matching record field
    """
    def set(self, value):
        pass


DISCARD = _Discard()


def scan_values(row, targets):
    """
    Write a positional row into ``targets``
    """
    if row is None:
        raise NotFound("sqlstruct: no rows in result set")

    for target, value in zip(targets, row):
        target.set(value)


def row_targets(names, table):
    targets = []
    for name in names:
        col = table.column(name)
        if col is None:
            logger.debug(f"Column '{name}' not found in {table.record_type.__name__}, discarding")
            targets.append(DISCARD)
        else:
            targets.append(col)
    return targets


def scan_row(rows, record, table=None):
    """
    Fetch the next row of ``rows`` into ``record``, matching result columns by name.
    """
    if table is None:
        table = extract_table(record)

    row = rows.fetchone()
    if row is None:
        raise NotFound("sqlstruct: no rows in result set")

    scan_values(row, row_targets(list(rows.keys()), table))
    return record
