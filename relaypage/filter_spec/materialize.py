""" Apply a Filter Spec to an in-memory collection """

from __future__ import annotations

from collections import abc
from typing import Any

from relaypage.typing import Record, get_field

from .spec import FilterSpec, SortingDirection


def materialize(results: Any, spec: FilterSpec) -> list:
    """ Apply order, filter, and take the window

    Steps:
    1. A single record is wrapped into a list
    2. Order is applied, if there are any order fields
    3. Filter is applied, if there are any filter fields
    4. Take `offset - index` records from the front

    The original collection is never modified.
    """
    records = list(results) if is_array(results) else [results]

    if spec.order_by:
        records = sort_records(records, spec.order_by)

    if spec.filter:
        records = filter_records(records, spec.filter)

    return records[:max(spec.window_size, 0)]


def sort_records(records: abc.Iterable[Record], order_by: abc.Mapping[str, SortingDirection]) -> list:
    """ Sort records by multiple fields. The first field is the primary sort key.

    Missing values (None) always go last.
    """
    records = list(records)

    # Sorting is stable: sort by the least significant key first
    for field, direction in reversed(order_by.items()):
        if SortingDirection.parse(direction) == SortingDirection.DESC:
            records.sort(key=_desc_key(field), reverse=True)
        else:
            records.sort(key=_asc_key(field))

    return records


def filter_records(records: abc.Iterable[Record], filter: abc.Mapping[str, Any]) -> list:
    """ Keep records that match every { field: value } equality predicate """
    return [
        record
        for record in records
        if all(
            get_field(record, name, _MISSING) == value
            for name, value in filter.items()
        )
    ]


def is_array(value: Any) -> bool:
    """ Is the value a list of records? """
    return isinstance(value, (list, tuple))


def is_record(value: Any) -> bool:
    """ Is the value a single record: a dict, or an object with attributes? """
    if is_array(value):
        return False
    return isinstance(value, abc.Mapping) or hasattr(value, '__dict__')


def _asc_key(field: str):
    def key(record):
        value = get_field(record, field)
        return (value is None, value)
    return key


def _desc_key(field: str):
    def key(record):
        value = get_field(record, field)
        return (value is not None, value)
    return key


# Marker for missing fields: never equal to anything
_MISSING = object()
