import logging

logger = logging.getLogger("sqlstruct")
