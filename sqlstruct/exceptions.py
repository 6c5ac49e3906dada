class SQLStructError(Exception):
    pass


class InvalidArgument(SQLStructError, TypeError):
    """
    The destination is not a record instance, or not a record type for bulk queries
    """


class NoPrimaryKey(SQLStructError):
    """
    No primary key could be resolved for the outermost record
    """


class NotFound(SQLStructError):
    """
    A single-row query matched zero rows
    """
