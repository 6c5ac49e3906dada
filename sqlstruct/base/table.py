from functools import cached_property

from ..logger import logger
from ..helpers.utils import new_record
from .statements import quote
from .tags import READONLY_TAG


class Column:
    """
    One relational column mapped onto a record field.

    ``field_path`` is the chain of attribute names from the root record, so a
    column flattened out of an embedded record reads ``record.address.city``.
    A column returned by ``Table.bind`` also holds its ``owner``: the object
    carrying the attribute, which ``set`` mutates in place.
    """
    def __init__(self, name, field_path, declared_type, flags=frozenset(), embedded=False, owner=None):
        self.name = name
        self.field_path = tuple(field_path)
        self.declared_type = declared_type
        self.flags = frozenset(flags)
        self.embedded = embedded
        self.owner = owner

    @property
    def field_name(self):
        return self.field_path[-1]

    @property
    def is_readonly(self):
        return READONLY_TAG in self.flags

    def _copy(self, **changes):
        attrs = dict(
            name=self.name,
            field_path=self.field_path,
            declared_type=self.declared_type,
            flags=self.flags,
            embedded=self.embedded,
            owner=self.owner,
        )
        attrs.update(changes)
        return Column(**attrs)

    def embed_under(self, field_name, prefix):
        name = f"{prefix}_{self.name}" if prefix else self.name
        return self._copy(name=name, field_path=(field_name,) + self.field_path)

    def promote(self):
        return self._copy(embedded=False)

    def bind(self, owner):
        return self._copy(owner=owner)

    def get(self):
        return getattr(self.owner, self.field_name)

    def set(self, value):
        setattr(self.owner, self.field_name, value)

    def __repr__(self):
        return f"Column(name={self.name!r} field={'.'.join(self.field_path)})"


class Table:
    """
    Ordered columns plus the ordered subset of them forming the primary key.

    ``records`` maps the field path of every embedded record to its type,
    parents before children; binding uses it to reach (or allocate) the
    objects owning flattened columns.
    """
    def __init__(self, record_type, columns, primary_keys, records=None):
        self.record_type = record_type
        self.columns = tuple(columns)
        self.primary_keys = tuple(primary_keys)
        self.records = dict(records or {})

    def __repr__(self):
        return f"Table({self.record_type.__name__} columns={self.names(True, True)} pk={[pk.name for pk in self.primary_keys]})"

    def is_primary_key(self, column):
        return any(column is pk for pk in self.primary_keys)

    def filtered_columns(self, include_pk, include_readonly):
        columns = []
        for col in self.columns:
            if not include_pk and self.is_primary_key(col):
                continue
            if not include_readonly and col.is_readonly:
                continue
            columns.append(col)
        return columns

    def names(self, include_pk, include_readonly):
        return [col.name for col in self.filtered_columns(include_pk, include_readonly)]

    def quoted_names(self, include_pk, include_readonly):
        return [quote(name) for name in self.names(include_pk, include_readonly)]

    def targets(self, include_pk, include_readonly):
        return self.filtered_columns(include_pk, include_readonly)

    def values(self, include_pk, include_readonly):
        return [col.get() for col in self.filtered_columns(include_pk, include_readonly)]

    @cached_property
    def _by_name(self):
        # A duplicated name shadows the earlier column
        return {col.name: col for col in self.columns}

    def column(self, name):
        return self._by_name.get(name)

    def bind(self, record):
        """
        Return a copy of this table whose columns read and write ``record``.

        Empty embedded records on the path are allocated and assigned back
        onto ``record`` first.
        """
        owners = {(): record}
        for path, record_type in self.records.items():
            parent = owners[path[:-1]]
            value = getattr(parent, path[-1])
            if value is None:
                logger.debug(f"Allocating empty {record_type.__name__} for '{'.'.join(path)}'")
                value = new_record(record_type)
                setattr(parent, path[-1], value)
            owners[path] = value

        bound = {}
        for col in self.columns:
            bound[id(col)] = col.bind(owners[col.field_path[:-1]])

        return Table(
            self.record_type,
            [bound[id(col)] for col in self.columns],
            [bound[id(pk)] for pk in self.primary_keys],
            self.records,
        )
