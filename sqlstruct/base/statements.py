from decimal import Decimal
from numbers import Real
from typing import NamedTuple, Sequence

from ..exceptions import InvalidArgument, NoPrimaryKey


class Statement(NamedTuple):
    sql: str
    args: tuple
    # Columns receiving the values of the returned row, in order
    targets: Sequence = ()


def quote(name):
    return f'"{name}"'


def placeholder(n):
    return f"${n}"


def placeholders(count, start=1):
    return [placeholder(n) for n in range(start, start + count)]


def resolve_table_name(table, table_name=None):
    if table_name:
        return table_name

    table_name = getattr(table.record_type, "__tablename__", None)
    if not table_name:
        raise InvalidArgument(f"sqlstruct: no table name given and {table.record_type.__name__} has no __tablename__")
    return table_name


def _require_primary_key(table, operation):
    if not table.primary_keys:
        raise NoPrimaryKey(f"sqlstruct.{operation}: primary key column required")


def _where(table, start):
    predicates = [
        f"{quote(pk.name)}={placeholder(start + i)}"
        for i, pk in enumerate(table.primary_keys)
    ]
    return " AND ".join(predicates)


def is_supplied_key(value):
    """
    Whether a primary key value was set by the caller rather than left for the server to generate
    """
    if value is None:
        return False
    if isinstance(value, (Real, Decimal)) and not isinstance(value, bool):
        return value > 0
    return True


def insert_statement(table, table_name=None):
    _require_primary_key(table, "Insert")

    include_pk = all(is_supplied_key(pk.get()) for pk in table.primary_keys)

    names = table.quoted_names(include_pk, False)
    if names:
        sql = "INSERT INTO {} ({}) VALUES ({})".format(
            quote(resolve_table_name(table, table_name)),
            ",".join(names),
            ",".join(placeholders(len(names))),
        )
    else:
        sql = f"INSERT INTO {quote(resolve_table_name(table, table_name))} DEFAULT VALUES"

    args = tuple(table.values(include_pk, False))

    if include_pk:
        return Statement(sql, args)

    sql += " RETURNING " + ",".join(quote(pk.name) for pk in table.primary_keys)
    return Statement(sql, args, table.primary_keys)


def update_statement(table, table_name=None):
    """
    ``None`` when the record has no writable non-key column
    """
    _require_primary_key(table, "Update")

    columns = table.quoted_names(False, False)
    if not columns:
        return None

    pairs = [f"{name}={ph}" for name, ph in zip(columns, placeholders(len(columns)))]

    sql = "UPDATE {} SET {} WHERE {}".format(
        quote(resolve_table_name(table, table_name)),
        ",".join(pairs),
        _where(table, len(columns) + 1),
    )
    args = tuple(table.values(False, False)) + tuple(pk.get() for pk in table.primary_keys)
    return Statement(sql, args)


def delete_statement(table, table_name=None):
    _require_primary_key(table, "Delete")

    sql = "DELETE FROM {} WHERE {}".format(
        quote(resolve_table_name(table, table_name)),
        _where(table, 1),
    )
    return Statement(sql, tuple(pk.get() for pk in table.primary_keys))


def load_statement(table, table_name, key):
    _require_primary_key(table, "Load")

    key = tuple(key)
    if len(key) != len(table.primary_keys):
        raise InvalidArgument(
            f"sqlstruct.Load: expected {len(table.primary_keys)} key value(s) "
            f"for {[pk.name for pk in table.primary_keys]}; got {len(key)}"
        )

    sql = "SELECT {} FROM {} WHERE {}".format(
        ",".join(table.quoted_names(True, True)),
        quote(resolve_table_name(table, table_name)),
        _where(table, 1),
    )
    return Statement(sql, key, table.targets(True, True))
