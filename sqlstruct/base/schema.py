from dataclasses import fields

from ..exceptions import InvalidArgument, NoPrimaryKey
from ..logger import logger
from ..helpers.utils import is_record, is_record_type, type_hints, unwrap_optional
from .table import Column, Table
from .tags import CONVENTION_PK_FIELD, EXCLUDE, NO_PREFIX, PK_TAG, field_tag, parse_tag

# Outermost tables keyed by record type; schemas are static for the process lifetime
_schema_cache = {}


def extract(record_type, nested=False):
    """
    Derive the table of a record type.

    Fields are visited in declaration order. Dataclass-typed fields (optionally
    wrapped in ``Optional``) are embedded records: their columns are flattened
    in place under a ``<prefix>_`` name prefix.

    Primary keys resolve with strict precedence:

    1. every field tagged ``pk``, in declaration order (composite keys)
    2. the field named exactly ``ID``
    3. the primary keys of the first embedded record that has any

    Only the outermost level (``nested=False``) requires a primary key.
    """
    if not is_record_type(record_type):
        raise InvalidArgument(f"sqlstruct: expected a dataclass type; got {record_type!r}")

    hints = type_hints(record_type)

    columns = []
    records = {}
    explicit_pks = []
    convention_pk = None
    embedded_pks = None

    for f in fields(record_type):
        if f.name.startswith("_"):
            continue

        declared_type, _ = unwrap_optional(hints.get(f.name, f.type))
        name_tag, flags = parse_tag(field_tag(f))

        if name_tag == EXCLUDE:
            continue

        if is_record_type(declared_type):
            sub = extract(declared_type, nested=True)

            prefix = _prefix(f.name, name_tag)
            flattened = [col.embed_under(f.name, prefix) for col in sub.columns]
            columns.extend(flattened)

            records[(f.name,)] = declared_type
            for path, sub_type in sub.records.items():
                records[(f.name,) + path] = sub_type

            if embedded_pks is None and sub.primary_keys:
                embedded_pks = [flattened[_position(sub.columns, pk)] for pk in sub.primary_keys]
            continue

        col = Column(
            name=name_tag or f.name.lower(),
            field_path=(f.name,),
            declared_type=declared_type,
            flags=flags,
            embedded=nested,
        )
        columns.append(col)

        if PK_TAG in flags:
            explicit_pks.append(col)

        if convention_pk is None and f.name == CONVENTION_PK_FIELD:
            convention_pk = col

    if explicit_pks:
        primary_keys = explicit_pks
    elif convention_pk is not None:
        primary_keys = [convention_pk]
    else:
        primary_keys = embedded_pks or []

    if not nested:
        if not primary_keys:
            raise NoPrimaryKey(f"sqlstruct: no primary key set/found for {record_type.__name__}")

        # Resolved keys become first-class columns of the outermost table
        promoted = {id(pk): pk.promote() for pk in primary_keys}
        columns = [promoted.get(id(col), col) for col in columns]
        primary_keys = [promoted[id(pk)] for pk in primary_keys]

    return Table(record_type, columns, primary_keys, records)


def _prefix(field_name, name_tag):
    if name_tag == NO_PREFIX:
        return ""
    return name_tag or field_name.lower()


def _position(columns, column):
    for idx, col in enumerate(columns):
        if col is column:
            return idx
    raise ValueError(f"{column!r} is not part of the table")


def schema_for(record_type):
    table = _schema_cache.get(record_type)
    if table is None:
        table = extract(record_type)
        _schema_cache[record_type] = table
        logger.debug(f"Extracted schema for {record_type.__name__}: {table}")
    return table


def clear_cache():
    _schema_cache.clear()


def extract_table(record):
    """
    Table of ``record`` with every column bound to the live instance.
    """
    if not is_record(record):
        raise InvalidArgument(f"sqlstruct: must be called with a record instance; got {record!r}")

    return schema_for(type(record)).bind(record)
