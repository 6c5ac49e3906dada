from dataclasses import field

TAG_NAME = "sql"
PK_TAG = "pk"
READONLY_TAG = "readonly"

# Name directives
EXCLUDE = "-"
NO_PREFIX = "_"

CONVENTION_PK_FIELD = "ID"


def parse_tag(tag):
    """
    Split a ``name,flag,flag`` annotation into the name override and the set of flags.

    An empty name means "derive from the field name". No escaping is supported.
    """
    segments = (tag or "").split(",")
    name = segments[0]
    flags = frozenset(segment for segment in segments[1:] if segment)
    return name, flags


def field_tag(f):
    return f.metadata.get(TAG_NAME, "")


def column(tag="", **kwargs):
    """
    ``dataclasses.field`` carrying a ``sql`` annotation, e.g. ``column("user_id,pk", default=0)``
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_NAME] = tag
    return field(metadata=metadata, **kwargs)
