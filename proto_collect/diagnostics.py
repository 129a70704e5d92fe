"""
Debug output for collections.

``Collection.dump()`` and ``Collection.dd()`` never print: they hand the
collection to the active ``Dumper``, which writes it through ``logging``.
Install another dumper with ``set_dumper`` to route dumps elsewhere.
"""
from __future__ import annotations

import logging
import pprint

_logger = logging.getLogger(__name__)


class Dumper:
    """
    Writes a readable rendering of a collection to a logger.

    :param logger: Target logger, ``proto_collect.diagnostics`` by default.
    :param width: Line width passed to ``pprint.pformat``.
    """

    def __init__(self, logger: logging.Logger | None = None, width: int = 100):
        self.logger = logger or _logger
        self.width = width

    def render(self, collection) -> str:
        return f'{type(collection).__name__} {pprint.pformat(collection.all(), width=self.width)}'

    def dump(self, collection, level: int = logging.DEBUG):
        self.logger.log(level, '%s', self.render(collection))


_dumper = Dumper()


def get_dumper() -> Dumper:
    return _dumper


def set_dumper(dumper: Dumper) -> Dumper:
    """
    Replace the active dumper, returning the previous one.
    """
    global _dumper
    previous, _dumper = _dumper, dumper
    return previous
