import re
import types
from dataclasses import MISSING, fields, is_dataclass
from functools import lru_cache
from typing import Union, get_args, get_origin, get_type_hints

from ..exceptions import InvalidArgument

_PLACEHOLDER = re.compile(r"\$(\d+)")

_ZERO_VALUES = {
    int: 0,
    float: 0.0,
    str: "",
    bytes: b"",
    bool: False,
}


def is_record_type(tp):
    return isinstance(tp, type) and is_dataclass(tp)


def is_record(obj):
    return is_dataclass(obj) and not isinstance(obj, type)


@lru_cache(maxsize=None)
def type_hints(record_type):
    """
    Resolved field annotations of a record type.

    String annotations resolve against the record's module; a name that only
    exists in a local scope (e.g. a class defined inside a function under
    ``from __future__ import annotations``) cannot be resolved.
    """
    try:
        return get_type_hints(record_type)
    except NameError as exc:
        raise InvalidArgument(
            f"sqlstruct: cannot resolve annotations of {record_type.__name__}: {exc}"
        ) from exc


def unwrap_optional(tp):
    """
    Return ``(X, True)`` for ``Optional[X]`` / ``X | None``, ``(tp, False)`` otherwise
    """
    if get_origin(tp) in (Union, types.UnionType):
        args = get_args(tp)
        non_none = [arg for arg in args if arg is not type(None)]
        if len(args) == 2 and len(non_none) == 1:
            return non_none[0], True
    return tp, False


def zero_value(tp):
    tp, optional = unwrap_optional(tp)
    if optional:
        return None
    if is_record_type(tp):
        return new_record(tp)
    return _ZERO_VALUES.get(tp)


def new_record(record_type):
    """
    Allocate a zero-valued instance: declared defaults where present, type zero values otherwise.
    """
    hints = type_hints(record_type)
    kwargs = {}
    for f in fields(record_type):
        if not f.init:
            continue
        if f.default is not MISSING or f.default_factory is not MISSING:
            continue
        kwargs[f.name] = zero_value(hints.get(f.name, f.type))
    return record_type(**kwargs)


def to_named_params(query, args):
    """
    Rewrite ``$n`` positional placeholders into ``:p_n`` named binds.
    """
    sql = _PLACEHOLDER.sub(lambda m: f":p_{m.group(1)}", query)
    params = {f"p_{i}": value for i, value in enumerate(args, start=1)}
    return sql, params
