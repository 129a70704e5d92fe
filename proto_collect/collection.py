"""
Ordered key-value collections.

A ``Collection`` keeps an ordered dict from keys to values and offers
chainable operations over it. Transformations (``map``, ``filter``,
``sort``, ``values``...) build new collections; ``put``, ``push`` and
``forget`` change the collection in place and return it.

Usage:
    users = collect([{'name': 'taylor', 'age': 30}, {'name': 'abigail', 'age': 25}])
    users.pluck('name').all()            # ['taylor', 'abigail']
    users.sort(lambda a, b: a['age'] - b['age']).first()['name']
    users.avg('age')                     # 27.5
"""
from __future__ import annotations

import logging
import math
from collections import OrderedDict
from collections.abc import Mapping
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Iterator

from . import arrow_bridge
from .common import AbstractCollection, DEFAULT_POLICY, MISSING, Policy, adapt_callback, compare_values, \
    is_accessible, is_numeric_key, is_sequence, parse_float, strictly_equal, value
from .diagnostics import get_dumper
from .exceptions import ProtoDumpAbortException, ProtoValidationException
from .normalize import objectable_items
from .paths import data_get
from .predicates import Predicate, ValueEquals, clause_predicate, operator_for_where, value_retriever, \
    where_clause

_logger = logging.getLogger(__name__)


class CollectionMode(Enum):
    SEQUENTIAL = 'sequential'
    KEYED = 'keyed'


def _mode_of(items: dict) -> CollectionMode:
    if all(is_numeric_key(key) for key in items):
        return CollectionMode.SEQUENTIAL
    return CollectionMode.KEYED


def _flatten_into(result: list, values: list, depth: float, top: bool):
    for item in values:
        if isinstance(item, AbstractCollection):
            item = item.all()
            nested = list(item.values()) if isinstance(item, Mapping) else list(item)
        elif is_sequence(item):
            nested = list(item)
        elif top and isinstance(item, Mapping):
            # Keys are dropped; mappings nested deeper are kept whole
            nested = list(item.values())
        else:
            result.append(item)
            continue

        if depth <= 1:
            result.extend(nested)
        else:
            _flatten_into(result, nested, depth - 1, False)


class Collection(AbstractCollection):
    """
    Ordered key-value container.

    Items may be given as a list, tuple, generator, mapping, list of
    ``(key, value)`` pairs, another collection, a single scalar or a plain
    object (see ``proto_collect.normalize``).

    A collection is *sequential* while every key is an integer (or an integer
    string); ``all()`` then returns a plain list. Writing a named key into a
    sequential collection with ``put`` discards its positional entries and
    makes it *keyed*.

    Callbacks receive ``(value, key)``; callbacks taking a single argument
    receive only the value.

    :param items: Input data in any accepted shape.
    :param policy: Behaviour switches, inherited by every derived collection.
    """
    _items: dict
    _mode: CollectionMode
    _policy: Policy

    def __init__(self, items: Any = None, policy: Policy | None = None):
        self._policy = policy or DEFAULT_POLICY
        self._items = objectable_items(items, self._policy)
        self._mode = _mode_of(self._items)

    @classmethod
    def make(cls, items: Any = None, policy: Policy | None = None) -> Collection:
        return cls(items, policy)

    @classmethod
    def range(cls, start: int | float, stop: int | float, step: int | float = 1) -> Collection:
        """
        Inclusive range from ``start`` to ``stop``, descending when
        ``start > stop``. ``step`` is the distance between items and must be
        positive.

        >>> Collection.range(5, 0, 2).all()
        [5, 3, 1]
        """
        if step <= 0:
            raise ProtoValidationException(message=f'Range step must be positive, got {step}')
        low, high = min(start, stop), max(start, stop)
        count = int((high - low) // step) + 1
        if start > stop:
            return cls([high - index * step for index in range(count)])
        return cls([low + index * step for index in range(count)])

    @property
    def policy(self) -> Policy:
        return self._policy

    def _derive(self, items: dict) -> Collection:
        """
        New collection over an already normalized dict, sharing this policy.
        """
        derived = self.__class__.__new__(self.__class__)
        derived._policy = self._policy
        derived._items = items
        derived._mode = _mode_of(items)
        return derived

    def _positional(self, values: list) -> Collection:
        return self._derive(dict(enumerate(values)))

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return iter(list(self._items.items()))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self):
        return f'{type(self).__name__}({self.all()!r})'

    # Access

    def all(self) -> list | dict:
        if self._mode is CollectionMode.SEQUENTIAL:
            return list(self._items.values())
        return dict(self._items)

    def is_list(self) -> bool:
        return self._mode is CollectionMode.SEQUENTIAL

    def count(self) -> int:
        return len(self._items)

    def contains_one_item(self) -> bool:
        return self.count() == 1

    def entries(self) -> list[tuple[Any, Any]]:
        return list(self._items.items())

    def get(self, key, fallback=None):
        if key in self._items:
            return self._items[key]
        return value(fallback)

    def has(self, *keys) -> bool:
        return all(key in self._items for key in keys)

    def first(self, callback: Callable | None = None, default=None):
        if callback is None:
            for item in self._items.values():
                return item
            return value(default)

        callback = adapt_callback(callback, 2)
        for key, item in self._items.items():
            if callback(item, key):
                return item
        return value(default)

    def last(self, callback: Callable | None = None, default=None):
        if callback is None:
            if not self._items:
                return value(default)
            return next(reversed(self._items.values()))
        return self.reverse().first(callback, default)

    def keys(self) -> Collection:
        return self._positional(list(self._items.keys()))

    def values(self) -> Collection:
        return self._positional(list(self._items.values()))

    # Mutation

    def put(self, key, value_) -> Collection:
        """
        Store ``value_`` under ``key``; a ``None`` key appends.

        A named key written into a sequential collection first drops every
        positional entry.
        """
        if key is None:
            return self.push(value_)

        if self._mode is CollectionMode.SEQUENTIAL and not is_numeric_key(key):
            if self._items:
                _logger.debug('Discarding %d positional entries before storing key %r', len(self._items), key)
            self._items = {}
            self._mode = CollectionMode.KEYED

        self._items[key] = value_
        return self

    def push(self, *values) -> Collection:
        for item in values:
            self._items[len(self._items)] = item
        return self

    def forget(self, *keys) -> Collection:
        for key in keys:
            self._items.pop(key, None)
        self._mode = _mode_of(self._items)
        return self

    # Queries

    def contains(self, *args) -> bool:
        """
        Determine if an item exists in the collection.

        - ``contains(value)``: some value is strictly equal to ``value``
        - ``contains(callback)``: some ``(value, key)`` satisfies ``callback``
        - ``contains(key, value)`` / ``contains(key, operator, value)``: some
          item has a matching value at the ``key`` path
        """
        predicate = adapt_callback(clause_predicate(where_clause(*args)), 2)
        return any(predicate(item, key) for key, item in self._items.items())

    def doesnt_contain(self, *args) -> bool:
        return not self.contains(*args)

    def contains_strict(self, key, value_=MISSING) -> bool:
        if value_ is not MISSING:
            return self.contains(lambda item, *_: strictly_equal(data_get(item, key), value_))
        if callable(key):
            return self.first(key) is not None
        return self.contains(key)

    def every(self, *args) -> bool:
        """
        True when every item passes the test; always True when empty.

        A single callable receives ``(value, key)``; a single path checks the
        truthiness of the value found there. Two or three arguments compare
        the value at a path, as in ``contains``.
        """
        clause = where_clause(*args)
        if isinstance(clause, ValueEquals):
            retrieve = value_retriever(clause.value)
            predicate = lambda item, key: retrieve(item)
        elif isinstance(clause, Predicate):
            predicate = adapt_callback(clause.fn, 2)
        else:
            predicate = operator_for_where(clause.key, clause.operator, clause.value)
        return all(predicate(item, key) for key, item in self._items.items())

    def each(self, callback: Callable) -> Collection:
        """
        Call ``callback(value, key)`` for every item; stop when it returns False.
        """
        callback = adapt_callback(callback, 2)
        for key, item in self:
            if callback(item, key) is False:
                break
        return self

    # Transformations

    def collect(self) -> Collection:
        return self.__class__(self.all(), self._policy)

    def with_policy(self, policy: Policy) -> Collection:
        derived = self._derive(dict(self._items))
        derived._policy = policy
        return derived

    def map(self, callback: Callable) -> Collection:
        callback = adapt_callback(callback, 2)
        return self._derive({key: callback(item, key) for key, item in self._items.items()})

    def filter(self, callback: Callable | None = None) -> Collection:
        """
        Keep the items passing ``callback(value, key)``, or the truthy values
        when no callback is given (empty strings, lists, dicts and
        collections are dropped).
        """
        if callback is None:
            return self._derive({key: item for key, item in self._items.items() if item})
        callback = adapt_callback(callback, 2)
        return self._derive({key: item for key, item in self._items.items() if callback(item, key)})

    def reverse(self) -> Collection:
        return self._derive(dict(reversed(list(self._items.items()))))

    def sort(self, callback: Callable | None = None) -> Collection:
        """
        Stable sort by value, keeping keys. ``callback(a, b)`` returns a
        negative, zero or positive number.
        """
        compare = callback or compare_values
        ordered = sorted(self._items.items(), key=cmp_to_key(lambda a, b: compare(a[1], b[1])))
        return self._derive(dict(ordered))

    def flatten(self, depth: int | float = math.inf) -> Collection:
        """
        Flatten nested lists, mappings and collections into a positional
        collection. ``depth`` limits how many levels are unwrapped.

        >>> Collection([['#foo', ['#bar', ['#baz']]], '#zap']).flatten(1).all()
        ['#foo', ['#bar', ['#baz']], '#zap']
        """
        if depth < 1:
            raise ProtoValidationException(message=f'Flatten depth must be at least 1, got {depth}')
        result = []
        _flatten_into(result, list(self._items.values()), depth, True)
        return self._positional(result)

    def collapse(self) -> Collection:
        return self.__class__(self.values().flatten(math.inf), self._policy)

    def combine(self, values) -> Collection:
        """
        Use this collection's values as keys for ``values``.
        """
        if isinstance(values, AbstractCollection):
            values = list(objectable_items(values, self._policy).values())
        return self._derive(dict(zip(self._items.values(), values)))

    def concat(self, source) -> Collection:
        result = self._derive(dict(self._items))
        return result.push(*objectable_items(source, self._policy).values())

    def diff(self, items) -> Collection:
        others = list(objectable_items(items, self._policy).values())
        return self.filter(lambda item: not any(strictly_equal(item, other) for other in others)).collect()

    def diff_assoc(self, items) -> Collection:
        others = list(objectable_items(items, self._policy).items())
        return self.filter(
            lambda item, key: not any(strictly_equal(key, other_key) and strictly_equal(item, other)
                                      for other_key, other in others)).collect()

    def diff_keys(self, items) -> Collection:
        others = list(objectable_items(items, self._policy).keys())
        return self.filter(lambda item, key: not any(strictly_equal(key, other) for other in others)).collect()

    def pluck(self, value_path, key_path=None) -> Collection:
        """
        Collect the value at ``value_path`` from every item, keyed by the value
        at ``key_path`` when given.

        >>> collect([{'brand': 'Tesla', 'color': 'red'}]).pluck('color', 'brand').all()
        {'Tesla': 'red'}
        """
        results = self._derive({})
        for _, item in self:
            item_value = data_get(item, value_path)
            if key_path is None:
                results.push(item_value)
                continue
            item_key = data_get(item, key_path)
            if is_accessible(item_key):
                item_key = str(item_key)
            results.put(item_key, item_value)
        return results

    # Aggregates

    def reduce(self, callback: Callable, initial=None):
        """
        Left fold calling ``callback(carry, value, key)``.
        """
        callback = adapt_callback(callback, 3)
        result = initial
        for key, item in self:
            result = callback(result, item, key)
        return result

    def sum(self, callback: Callable | str | None = None):
        retrieve = value_retriever(callback)
        return self.reduce(lambda carry, item: carry + parse_float(retrieve(item)), 0)

    def avg(self, callback: Callable | str | None = None):
        """
        Mean of the retrieved values, ignoring falsy ones; ``nan`` when none remain.
        """
        retrieve = value_retriever(callback)
        items = self.map(lambda item: retrieve(item)).filter()
        count = items.count()
        if count:
            return items.sum() / count
        return math.nan

    def average(self, callback: Callable | str | None = None):
        return self.avg(callback)

    def median(self, key=None):
        source = self.pluck(key) if key is not None else self
        numeric = source.filter(lambda item: not math.isnan(parse_float(item))) \
            .sort(lambda left, right: compare_values(parse_float(left), parse_float(right))).values()
        count = numeric.count()
        if count == 0:
            return math.nan

        middle = count // 2
        if count % 2:
            return numeric.get(middle)
        return (parse_float(numeric.get(middle - 1)) + parse_float(numeric.get(middle))) / 2

    def mode(self, key=None) -> list:
        """
        Most frequent values, ascending; empty list for an empty collection.
        """
        if not self._items:
            return []

        source = self.pluck(key) if key is not None else self
        # Lists and dicts are valid values, so distinct values are matched by equality
        counts: list[list] = []
        for _, item in source:
            for entry in counts:
                if strictly_equal(entry[0], item):
                    entry[1] += 1
                    break
            else:
                counts.append([item, 1])
        highest = max(seen for _, seen in counts)
        winners = [item for item, seen in counts if seen == highest]
        return sorted(winners, key=cmp_to_key(compare_values))

    # Export

    def to_array(self) -> list:
        return self.values().all()

    def to_object(self) -> dict:
        return dict(self._items)

    def to_map(self) -> OrderedDict:
        return OrderedDict(self._items)

    def to_arrow(self, columns=None):
        """
        Export a collection of records as a ``pyarrow.Table``.
        """
        return arrow_bridge.to_arrow(self._items.values(), columns)

    @classmethod
    def from_arrow(cls, table, policy: Policy | None = None) -> Collection:
        return cls(arrow_bridge.from_arrow(table), policy)

    # Diagnostics

    def dump(self) -> Collection:
        get_dumper().dump(self, self._policy.dump_level)
        return self

    def dd(self):
        self.dump()
        raise ProtoDumpAbortException(message='Stopping code execution from Collection.dd()')


def collect(items: Any = None, policy: Policy | None = None) -> Collection:
    """
    Create a collection from the given items.
    """
    return Collection(items, policy)
