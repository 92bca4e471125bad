from __future__ import annotations

from collections import abc
from typing import Any, Union, Optional, TypedDict


# A record: one row of the result set.
# Either a dict (e.g. a database row as a dict) or an arbitrary object with attributes
Record = Union[abc.Mapping, object]

# A result set: the list of records returned by the data layer
ResultSet = list


class PaginationArgs(TypedDict, total=False):
    """ Relay pagination arguments, as received by a connection field

    Missing keys mean "not provided"
    """
    first: Optional[Union[int, str]]
    last: Optional[Union[int, str]]
    before: Optional[str]
    after: Optional[str]

    # Symbolic name, a list of (field, direction) pairs, or absent
    orderBy: Optional[Union[str, list]]


def get_field(record: Record, name: str, default: Any = None) -> Any:
    """ Get a field value from a record: works with dicts and objects """
    if isinstance(record, abc.Mapping):
        return record.get(name, default)
    else:
        return getattr(record, name, default)
