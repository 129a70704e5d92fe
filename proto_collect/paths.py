"""
Dot-notation access to nested data.

Paths are dot separated strings (``'users.0.name'``), pre-split segment lists
(``['users', 'first.name']``) or single integers. The segment ``*`` applies
the rest of the path to every element found at that level.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from typing import Any

from .common import AbstractCollection, MISSING, is_attribute_object, is_numeric_key, is_sequence, \
    public_attributes, value

WILDCARD = '*'


class Node(ABC):
    """
    Uniform view over an accessible value.

    Nodes translate path segments into real keys (``locate``) and read, write,
    add and remove entries. Writes may replace the wrapped object (a tuple
    becomes a list, a list receiving a named key becomes a dict), so callers
    must read ``target`` back after writing.
    """

    def __init__(self, target: Any):
        self.target = target

    @staticmethod
    def of(target: Any) -> Node | None:
        """
        Wrap ``target`` in the matching node, or return None when it cannot
        be descended into.
        """
        if isinstance(target, AbstractCollection):
            return CollectionNode(target)
        if isinstance(target, Mapping):
            return MappingNode(target)
        if is_sequence(target):
            return SequenceNode(target)
        if is_attribute_object(target):
            return AttributeNode(target)
        return None

    @abstractmethod
    def locate(self, segment: str) -> Any:
        """
        Real key addressed by ``segment``, or MISSING.
        """

    @abstractmethod
    def keys(self) -> list:
        """
        Every real key, in order.
        """

    def read(self, key: Any) -> Any:
        return self.target[key]

    def write(self, key: Any, value_: Any):
        self.target[key] = value_

    def add(self, segment: str, value_: Any):
        """
        Store a value under a segment that ``locate`` could not find.
        """
        self.write(segment, value_)

    def remove(self, key: Any):
        del self.target[key]

    def items(self) -> list[tuple[Any, Any]]:
        return [(key, self.read(key)) for key in self.keys()]


class MappingNode(Node):
    def locate(self, segment: str) -> Any:
        if segment in self.target:
            return segment
        if is_numeric_key(segment) and int(segment) in self.target:
            return int(segment)
        return MISSING

    def keys(self) -> list:
        return list(self.target.keys())

    def write(self, key: Any, value_: Any):
        if not isinstance(self.target, MutableMapping):
            self.target = dict(self.target)
        self.target[key] = value_

    def remove(self, key: Any):
        if not isinstance(self.target, MutableMapping):
            self.target = dict(self.target)
        del self.target[key]


class SequenceNode(Node):
    def locate(self, segment: str) -> Any:
        if is_numeric_key(segment):
            index = int(segment)
            if 0 <= index < len(self.target):
                return index
        return MISSING

    def keys(self) -> list:
        return list(range(len(self.target)))

    def _mutable(self) -> list:
        if not isinstance(self.target, list):
            self.target = list(self.target)
        return self.target

    def write(self, key: Any, value_: Any):
        self._mutable()[key] = value_

    def add(self, segment: str, value_: Any):
        items = self._mutable()
        if is_numeric_key(segment) and int(segment) == len(items):
            items.append(value_)
            return
        # A named key turns the list into an index-keyed record
        record = dict(enumerate(items))
        record[int(segment) if is_numeric_key(segment) else segment] = value_
        self.target = record

    def remove(self, key: Any):
        del self._mutable()[key]


class CollectionNode(Node):
    def locate(self, segment: str) -> Any:
        if self.target.has(segment):
            return segment
        if is_numeric_key(segment) and self.target.has(int(segment)):
            return int(segment)
        return MISSING

    def keys(self) -> list:
        return [key for key, _ in self.target.entries()]

    def read(self, key: Any) -> Any:
        return self.target.get(key)

    def write(self, key: Any, value_: Any):
        self.target.put(key, value_)

    def add(self, segment: str, value_: Any):
        self.target.put(int(segment) if is_numeric_key(segment) else segment, value_)

    def remove(self, key: Any):
        self.target.forget(key)


class AttributeNode(Node):
    def locate(self, segment: str) -> Any:
        if not segment.startswith('_') and hasattr(self.target, segment):
            return segment
        return MISSING

    def keys(self) -> list:
        return list(public_attributes(self.target))

    def read(self, key: Any) -> Any:
        return getattr(self.target, key)

    def write(self, key: Any, value_: Any):
        setattr(self.target, key, value_)

    def remove(self, key: Any):
        delattr(self.target, key)


def split_path(key: Any) -> list[str]:
    if isinstance(key, (list, tuple)):
        return [str(segment) for segment in key]
    return str(key).split('.')


def _flatten_once(results: list) -> list:
    flat = []
    for result in results:
        if isinstance(result, list):
            flat.extend(result)
        else:
            flat.append(result)
    return flat


def data_get(target: Any, key: Any = None, fallback: Any = None) -> Any:
    """
    Retrieve a nested value using dot notation.

    An empty key returns ``target`` itself. When a segment cannot be resolved
    the fallback is returned, calling it first when it is callable. A key that
    exists with a ``None`` value resolves to ``None``, not to the fallback.

    >>> data_get({'users': {'name': ['Taylor', 'Otwell']}}, 'users.name.0')
    'Taylor'
    >>> data_get([{'name': 'taylor'}, {'name': 'abigail'}], '*.name')
    ['taylor', 'abigail']
    """
    if key is None or (isinstance(key, (str, list, tuple)) and not key):
        return target

    segments = split_path(key)
    remaining = list(segments)

    for segment in segments:
        remaining.pop(0)

        if not segment:
            return target

        if segment == WILDCARD:
            if isinstance(target, AbstractCollection):
                target = target.all()
            node = Node.of(target)
            if node is None:
                return value(fallback)

            results = [data_get(item, list(remaining), fallback) for _, item in node.items()]
            # Each nested wildcard yields one list per element
            return _flatten_once(results) if WILDCARD in remaining else results

        node = Node.of(target)
        if node is None:
            return value(fallback)
        located = node.locate(segment)
        if located is MISSING:
            return value(fallback)
        target = node.read(located)

    return target


def data_set(target: Any, key: Any, value_: Any, overwrite: bool = True) -> Any:
    """
    Set a nested value using dot notation, creating intermediate dicts as needed.

    Scalars standing in the way are replaced by dicts. With ``overwrite=False``
    existing values are kept. The root may be replaced (``None`` becomes a
    dict, a list receiving a named key becomes a dict), so always use the
    returned value.

    >>> data_set({'foo': 'bar'}, 'foo.bar', 'boom')
    {'foo': {'bar': 'boom'}}
    """
    segments = split_path(key)
    if not segments:
        return target
    segment = segments.pop(0)

    node = Node.of(target)
    if node is None:
        node = MappingNode({})

    if segment == WILDCARD:
        if segments:
            for item_key in node.keys():
                node.write(item_key, data_set(node.read(item_key), list(segments), value_, overwrite))
        elif overwrite:
            for item_key in node.keys():
                node.write(item_key, value_)
        return node.target

    located = node.locate(segment)
    if segments:
        if located is MISSING:
            node.add(segment, {})
            # Adding may have turned a list into a dict
            node = Node.of(node.target)
            located = node.locate(segment)
        node.write(located, data_set(node.read(located), list(segments), value_, overwrite))
    elif located is MISSING:
        node.add(segment, value_)
    elif overwrite:
        node.write(located, value_)

    return node.target


def data_fill(target: Any, key: Any, value_: Any) -> Any:
    """
    Like ``data_set`` but never overwrites an existing value.

    >>> data_fill({'foo': 'bar'}, 'baz', 'boom')
    {'foo': 'bar', 'baz': 'boom'}
    """
    return data_set(target, key, value_, overwrite=False)


def _forget_leaf(node: Node, segment: str):
    located = node.locate(segment)
    if located is not MISSING:
        node.remove(located)
        return

    # The segment may itself be a dotted path (pre-split keys keep dots)
    parts = segment.split('.')
    current = node
    while len(parts) > 1:
        part = parts.pop(0)
        child_key = current.locate(part)
        if child_key is not MISSING:
            child = Node.of(current.read(child_key))
            if child is not None:
                current = child

    located = current.locate(parts[0])
    if located is not MISSING:
        current.remove(located)


def data_forget(target: Any, key: Any) -> Any:
    """
    Remove a nested value using dot notation.

    Removing from a list shifts the following items down. Missing keys are
    ignored.

    >>> data_forget({'one': {'two': 2, 'three': 3}}, 'one.two')
    {'one': {'three': 3}}
    """
    segments = split_path(key)
    if not segments:
        return target
    segment = segments.pop(0)

    node = Node.of(target)
    if node is None:
        return target

    if segment == WILDCARD:
        for item_key in (node.keys() if segments else []):
            node.write(item_key, data_forget(node.read(item_key), list(segments)))
        return node.target

    located = node.locate(segment)
    if segments and located is not MISSING:
        node.write(located, data_forget(node.read(located), list(segments)))
        return node.target

    for doomed in (segments or [segment]):
        _forget_leaf(node, doomed)
    return node.target
