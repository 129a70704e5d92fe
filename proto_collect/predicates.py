from __future__ import annotations

import operator as op
from dataclasses import dataclass
from typing import Any, Callable, Union

from .common import is_accessible, loosely_equal, parse_float, is_number, strictly_equal
from .exceptions import ProtoValidationException
from .paths import data_get

INEQUALITY_OPERATORS = ('!=', '<>', '!==')


@dataclass(frozen=True)
class Predicate:
    """A caller supplied test receiving ``(value, key)``."""
    fn: Callable[..., Any]


@dataclass(frozen=True)
class ValueEquals:
    """Matches items strictly equal to ``value``."""
    value: Any


@dataclass(frozen=True)
class KeyOperatorValue:
    """Compares the value found at ``key`` in each item with ``value``."""
    key: Any
    operator: str = '='
    value: Any = True


WhereClause = Union[Predicate, ValueEquals, KeyOperatorValue]


def where_clause(*args) -> WhereClause:
    """
    Build the clause described by the positional arguments of
    ``contains``-like calls:

    - ``(callable)`` gives a Predicate
    - ``(value)`` gives ValueEquals
    - ``(key, value)`` gives KeyOperatorValue with ``'='``
    - ``(key, operator, value)`` gives KeyOperatorValue
    """
    if len(args) == 1:
        if callable(args[0]):
            return Predicate(args[0])
        return ValueEquals(args[0])
    if len(args) == 2:
        return KeyOperatorValue(args[0], '=', args[1])
    if len(args) == 3:
        return KeyOperatorValue(*args)
    raise ProtoValidationException(message=f'Expected between 1 and 3 arguments, got {len(args)}')


def value_retriever(callback: Callable | str | None = None) -> Callable[[Any], Any]:
    """
    Unary function extracting "the value to act on" from an item: the
    callback itself, or a dot path looked up with ``data_get``.
    """
    if callable(callback):
        return callback
    return lambda item: data_get(item, callback)


def _numeric_pair(left: Any, right: Any) -> tuple[Any, Any]:
    if is_number(left) and isinstance(right, str):
        return left, parse_float(right)
    if isinstance(left, str) and is_number(right):
        return parse_float(left), right
    return left, right


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def _compare(left, right):
        if left is None or right is None:
            return False
        left, right = _numeric_pair(left, right)
        try:
            return bool(compare(left, right))
        except TypeError:
            return False
    return _compare


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    '=': loosely_equal,
    '==': loosely_equal,
    '!=': lambda a, b: not loosely_equal(a, b),
    '<>': lambda a, b: not loosely_equal(a, b),
    '<': _ordered(op.lt),
    '>': _ordered(op.gt),
    '<=': _ordered(op.le),
    '>=': _ordered(op.ge),
    '===': strictly_equal,
    '!==': lambda a, b: not strictly_equal(a, b),
}


def operator_for_where(key: Any, *args) -> Callable[..., bool]:
    """
    Predicate comparing the value at ``key`` in each item.

    ``operator_for_where('active')`` checks ``item['active'] == True``,
    ``operator_for_where('age', 18)`` checks equality and
    ``operator_for_where('age', '>=', 18)`` uses the given operator. Unknown
    operators fall back to loose equality. A callable ``key`` is returned
    unchanged.
    """
    if callable(key):
        return key
    if len(args) == 0:
        operator, expected = '=', True
    elif len(args) == 1:
        operator, expected = '=', args[0]
    elif len(args) == 2:
        operator, expected = args
    else:
        raise ProtoValidationException(message=f'Expected at most 3 arguments, got {len(args) + 1}')

    compare = _OPERATORS.get(operator, loosely_equal)

    def _where(item, *_):
        retrieved = data_get(item, key)
        operands = (retrieved, expected)
        containers = [o for o in operands if is_accessible(o)]
        textual = [o for o in operands if isinstance(o, str) or is_accessible(o)]
        # A structure compared with a scalar only satisfies inequalities
        if len(textual) < 2 and len(containers) == 1:
            return operator in INEQUALITY_OPERATORS
        return compare(retrieved, expected)

    return _where


def clause_predicate(clause: WhereClause) -> Callable[..., bool]:
    """
    ``(value, key)`` predicate equivalent to ``clause``.
    """
    if isinstance(clause, Predicate):
        return clause.fn
    if isinstance(clause, ValueEquals):
        return lambda item, *_: strictly_equal(item, clause.value)
    return operator_for_where(clause.key, clause.operator, clause.value)
