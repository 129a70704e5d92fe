from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Optional, Sequence

from .common import is_attribute_object, public_attributes
from .exceptions import ProtoNotSupportedException

# Optional imports
try:
    import pyarrow as pa  # type: ignore
except Exception:  # pragma: no cover
    pa = None

try:
    import numpy as np  # type: ignore
except Exception:  # pragma: no cover
    np = None


class ArrowNotAvailable(RuntimeError):
    pass


def _require_arrow():
    if pa is None:
        raise ArrowNotAvailable(
            "pyarrow is required for Arrow integration. Install 'pyarrow' to enable this feature.")


def _row_of(record: Any) -> Mapping:
    if isinstance(record, Mapping):
        return record
    if is_attribute_object(record):
        return public_attributes(record)
    raise ProtoNotSupportedException(
        message=f'Only records can be exported to Arrow, found a {type(record).__name__}')


def _plain(value: Any) -> Any:
    # numpy buffers become nested lists; pyarrow infers their element type
    if np is not None and isinstance(value, np.ndarray):
        return value.tolist()
    return value


def to_arrow(records: Iterable[Any], columns: Optional[Sequence[str]] = None) -> Any:
    """
    Build a pyarrow.Table from an iterable of records (mappings or attribute
    objects). Columns default to the union of the record keys in first-seen
    order; missing values become nulls.
    """
    _require_arrow()
    rows = [_row_of(record) for record in records]
    if columns is None:
        names: dict[str, None] = {}
        for row in rows:
            names.update(dict.fromkeys(row.keys()))
        columns = list(names)
    cols: dict[str, list] = {str(name): [] for name in columns}
    for row in rows:
        for name in columns:
            cols[str(name)].append(_plain(row.get(name)))
    return pa.table({name: pa.array(col) for name, col in cols.items()})


def from_arrow(table: Any) -> list[dict]:
    """
    Rows of a pyarrow.Table (or RecordBatch) as a list of dicts.
    """
    _require_arrow()
    return table.to_pylist()
