"""
Basic definitions
"""
from __future__ import annotations

import dataclasses
import inspect
import logging
import numbers
import re
import types
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from .exceptions import ProtoValidationException

_NUMERIC_KEY = re.compile(r'[+-]?\d+')

UNRECOGNIZED_MODES = ('error', 'warn', 'fallback')


class _Missing:
    """Marker for keys and arguments that are absent (``None`` is a valid value)."""

    def __repr__(self):
        return 'MISSING'

    def __bool__(self):
        return False


MISSING = _Missing()


@dataclass
class Policy:
    """Behaviour switches shared by a collection and every collection derived from it.

    on_unrecognized: 'error' | 'warn' | 'fallback'
    Governs inputs that only match the catch-all normalization rule (arbitrary
    objects turned into keyed records from their public attributes).
    dump_level: logging level used by ``Collection.dump()``.
    """
    on_unrecognized: str = "fallback"  # 'error' | 'warn' | 'fallback'
    dump_level: int = logging.DEBUG

    def __post_init__(self):
        if self.on_unrecognized not in UNRECOGNIZED_MODES:
            raise ProtoValidationException(
                message=f'on_unrecognized must be one of {UNRECOGNIZED_MODES}, not {self.on_unrecognized!r}')


DEFAULT_POLICY = Policy()


class AbstractCollection(ABC):
    """
    ABC to solve forward type definitions

    The path resolver and the normalizer work on collections without importing
    the concrete class.
    """

    @abstractmethod
    def all(self) -> list | dict:
        """
        Plain export: a list of values for sequential collections, a keyed dict otherwise.
        """

    @abstractmethod
    def is_list(self) -> bool:
        """
        True when every key of the collection is an integer (or an integer string).
        """

    @abstractmethod
    def has(self, *keys) -> bool:
        """
        True when all the given keys are present.
        """

    @abstractmethod
    def get(self, key, fallback=None):
        """
        Direct key lookup returning the evaluated fallback on a miss.
        """

    @abstractmethod
    def put(self, key, value) -> AbstractCollection:
        """
        Store a value under a key, in place.
        """

    @abstractmethod
    def forget(self, *keys) -> AbstractCollection:
        """
        Remove the given keys, in place.
        """

    @abstractmethod
    def entries(self) -> list[tuple[Any, Any]]:
        """
        Ordered (key, value) pairs.
        """


def value(value_, *args):
    """
    Evaluate a value that may be a producer.

    ``value('foo')`` returns ``'foo'``; ``value(lambda: 'foo')`` returns ``'foo'``.
    Extra arguments are passed to the producer.
    """
    if callable(value_):
        return value_(*args)
    return value_


def is_number(data: Any) -> bool:
    return isinstance(data, numbers.Real) and not isinstance(data, bool)


def is_numeric_key(key: Any) -> bool:
    """
    True when ``str(key)`` is a base-10 integer, e.g. ``3``, ``'3'`` or ``'-1'``.
    """
    if isinstance(key, bool):
        return False
    return _NUMERIC_KEY.fullmatch(str(key)) is not None


def parse_float(data: Any) -> int | float:
    """
    Numeric reading of a value: numbers pass through, strings are parsed,
    anything else (``None`` and booleans included) is ``nan``.
    """
    if is_number(data):
        return data
    if isinstance(data, (str, bytes)):
        try:
            return float(data.strip())
        except ValueError:
            return float('nan')
    return float('nan')


def is_scalar(data: Any) -> bool:
    return data is None or isinstance(data, (str, bytes, bytearray, numbers.Number))


def is_attribute_object(data: Any) -> bool:
    """
    True for plain objects exposing their state as attributes (dataclass
    instances and objects with a ``__dict__``), excluding classes, modules
    and callables.
    """
    if is_scalar(data) or isinstance(data, (type, types.ModuleType)) or callable(data):
        return False
    if dataclasses.is_dataclass(data):
        return True
    return hasattr(data, '__dict__')


def public_attributes(data: Any) -> dict:
    if dataclasses.is_dataclass(data):
        names = [field.name for field in dataclasses.fields(data)]
    else:
        names = list(vars(data))
    return {name: getattr(data, name) for name in names if not name.startswith('_')}


def is_sequence(data: Any) -> bool:
    return isinstance(data, (list, tuple))


def is_accessible(data: Any) -> bool:
    """
    True for values the path resolver can descend into: mappings, lists,
    tuples, collections and attribute objects.
    """
    return (isinstance(data, (Mapping, AbstractCollection)) or is_sequence(data)
            or is_attribute_object(data))


def strictly_equal(left: Any, right: Any) -> bool:
    """
    Equality without cross-type coercion: ``1`` equals ``1.0`` but neither
    ``'1'`` nor ``True``.
    """
    if left is right:
        return True
    if is_number(left) and is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def loosely_equal(left: Any, right: Any) -> bool:
    """
    Equality where a number also matches its string spelling (``18 == '18'``).
    """
    if is_number(left) and isinstance(right, str):
        return left == parse_float(right)
    if isinstance(left, str) and is_number(right):
        return parse_float(left) == right
    return left == right


def compare_values(left: Any, right: Any) -> int:
    """
    Default ordering for ``Collection.sort``: numbers numerically, anything
    else by its string form, case-insensitively first.
    """
    if is_number(left) and is_number(right):
        return (left > right) - (left < right)
    left_text, right_text = str(left), str(right)
    left_folded, right_folded = left_text.casefold(), right_text.casefold()
    folded = (left_folded > right_folded) - (left_folded < right_folded)
    return folded or (left_text > right_text) - (left_text < right_text)


def adapt_callback(callback: Callable, max_args: int) -> Callable:
    """
    Wrap a user callback so it can always be called with ``max_args``
    positional arguments, forwarding only as many as it accepts.

    ``lambda item: ...`` and ``lambda item, key: ...`` are both valid
    ``map`` callbacks.
    """
    try:
        parameters = inspect.signature(callback).parameters.values()
    except (TypeError, ValueError):
        # Builtins without introspectable signatures take the value only
        accepted = 1
    else:
        if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in parameters):
            accepted = max_args
        else:
            positional = [p for p in parameters
                          if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)]
            accepted = max(1, min(len(positional), max_args))

    if accepted >= max_args:
        return callback

    def _adapted(*args):
        return callback(*args[:accepted])

    return _adapted
