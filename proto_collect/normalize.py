"""
Input normalization for collections.

Every accepted input shape is turned into one ordered ``dict``. Rules are
tried in order and the first match wins:

=============  ============================================================
rule           result
=============  ============================================================
empty          ``None`` gives ``{}``
scalar         strings, bytes, numbers and opaque objects: ``{0: items}``
collection     the collection's export, re-keyed if it is sequential
mapping        shallow copy in the mapping's own order
pairs          lists/tuples made only of ``(key, value)`` pairs
iterable       any other iterable, keyed by position
record         any remaining object, keyed by its public attributes
=============  ============================================================
"""
from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable, Mapping
from typing import Any, Callable

from .common import AbstractCollection, DEFAULT_POLICY, Policy, is_attribute_object, is_scalar, \
    public_attributes
from .exceptions import ProtoValidationException

_logger = logging.getLogger(__name__)


def _is_pair(item: Any) -> bool:
    if not isinstance(item, (list, tuple)) or len(item) != 2:
        return False
    try:
        hash(item[0])
    except TypeError:
        return False
    return True


def _is_scalar_input(items: Any) -> bool:
    if is_scalar(items):
        return True
    structured = (isinstance(items, (AbstractCollection, Mapping, Iterable))
                  or is_attribute_object(items))
    return not structured


def _is_pair_sequence(items: Any) -> bool:
    return isinstance(items, (list, tuple)) and all(_is_pair(item) for item in items)


def _from_sequence(items: list | tuple, policy: Policy) -> dict:
    if all(_is_pair(item) for item in items):
        return dict(items)
    return dict(enumerate(items))


def _from_iterable(items: Iterable, policy: Policy) -> dict:
    # Materialize first: generators can only be walked once
    return _from_sequence(list(items), policy)


def _from_collection(items: AbstractCollection, policy: Policy) -> dict:
    exported = items.all()
    if isinstance(exported, list):
        return dict(enumerate(exported))
    return objectable_items(exported, policy)


def _from_record(items: Any, policy: Policy) -> dict:
    description = f'{type(items).__name__} instance'
    if policy.on_unrecognized == 'error':
        raise ProtoValidationException(
            message=f'Cannot build a collection from a {description}; pass a mapping or an iterable')
    if policy.on_unrecognized == 'warn':
        warnings.warn(f'Building a collection from the public attributes of a {description}', RuntimeWarning)
    _logger.debug('Normalizing %s through its public attributes', description)
    return public_attributes(items)


_RULES: list[tuple[str, Callable[[Any], bool], Callable[[Any, Policy], dict]]] = [
    ('empty', lambda items: items is None, lambda items, policy: {}),
    ('scalar', _is_scalar_input, lambda items, policy: {0: items}),
    ('collection', lambda items: isinstance(items, AbstractCollection), _from_collection),
    ('mapping', lambda items: isinstance(items, Mapping), lambda items, policy: dict(items)),
    ('pairs', _is_pair_sequence, lambda items, policy: dict(items)),
    ('iterable', lambda items: isinstance(items, Iterable), _from_iterable),
    # Catch-all: whatever is left exposes attributes
    ('record', lambda items: True, _from_record),
]


def shape_of(items: Any) -> str:
    """
    Name of the normalization rule ``items`` falls under.
    """
    for name, matches, _ in _RULES:
        if matches(items):
            return name
    raise AssertionError('the record rule matches every input')


def objectable_items(items: Any, policy: Policy | None = None) -> dict:
    """
    Canonical ordered dict for any accepted input shape.

    :param items: Input of any shape (see the module documentation).
    :param policy: Policy deciding how the catch-all record rule behaves.
    :return: A new dict; the input is never aliased.
    """
    policy = policy or DEFAULT_POLICY
    for name, matches, convert in _RULES:
        if matches(items):
            return convert(items, policy)
    raise AssertionError('the record rule matches every input')
