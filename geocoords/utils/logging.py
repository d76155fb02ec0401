"""Logging utility for geocoords"""

__all__ = ['LOGGER', 'warn_once']

import logging

LOGGER = logging.getLogger('geocoords')
LOGGER.setLevel(logging.WARNING)
_LOG_HANDLER = logging.StreamHandler()
_LOG_FORMATTER = logging.Formatter('[%(levelname)s] %(name)s: %(message)s')
_LOG_HANDLER.setFormatter(_LOG_FORMATTER)
LOGGER.addHandler(_LOG_HANDLER)

_WARNINGS = set()


def warn_once(warning: str, *args):
    """
    Logs a warning the first time a given message template is seen. Arguments are
    interpolated lazily and do not take part in deduplication, so a warning about
    e.g. a non-converging projection is emitted once regardless of the input values.
    """
    if warning not in _WARNINGS:
        LOGGER.warning(warning, *args)
        _WARNINGS.add(warning)
