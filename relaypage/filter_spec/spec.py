""" Filter spec: the value object """

from __future__ import annotations

import dataclasses
from collections import abc
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from relaypage import exc


# The `limit` you get by default
DEFAULT_LIMIT = 40


class SortingDirection(Enum):
    ASC = 'ASC'
    DESC = 'DESC'

    @classmethod
    def parse(cls, direction: Union[str, SortingDirection]) -> SortingDirection:
        """ Get a direction from a string: 'ASC', 'asc', 'DESC', 'desc'

        Raises:
            exc.InvalidOrderError
        """
        if isinstance(direction, SortingDirection):
            return direction

        try:
            return cls(str(direction).upper())
        except ValueError:
            raise exc.InvalidOrderError(direction, 'direction must be either ASC or DESC')

    def inverted(self) -> SortingDirection:
        """ Get the opposite direction """
        return SortingDirection.DESC if self == SortingDirection.ASC else SortingDirection.ASC


@dataclass(frozen=True)
class FilterSpec:
    """ Filter Spec: limit, order, and filter intent

    The object is immutable: every builder operation produces a new one.
    It is created per request and never shared.
    """
    # Max window size. Only used when `offset` is not set
    limit: int = DEFAULT_LIMIT

    # Mapping { field name => direction }
    # Insertion order is the sort priority
    order_by: dict[str, SortingDirection] = dataclasses.field(default_factory=dict)

    # Mapping { field name => required value }, AND-combined
    filter: dict[str, Any] = dataclasses.field(default_factory=dict)

    # The absolute upper bound of the window. `None`: use `index + limit`
    offset: Optional[int] = None

    # Zero-based starting position within the full ordered set
    index: int = 0

    def __post_init__(self):
        if self.offset is not None and self.offset < self.index:
            raise exc.FilterSpecError(f'"offset" ({self.offset}) cannot be less than "index" ({self.index})')

    @property
    def window_size(self) -> int:
        """ The number of records to take: `offset - index` """
        offset = self.offset if self.offset is not None else self.index + self.limit
        return offset - self.index

    @classmethod
    def from_dict(cls, filtering: Optional[abc.Mapping]) -> FilterSpec:
        """ Construct a Filter Spec from a partial dict

        Every field not mentioned keeps its default value.

        Example:
            FilterSpec.from_dict({'limit': 10, 'orderBy': {'ctime': 'DESC'}})
        """
        if not filtering:
            return cls()

        unk_keys = set(filtering) - set(INPUT_KEYS)
        if unk_keys:
            raise exc.FilterSpecError(f'unknown keys: {", ".join(sorted(unk_keys))}')

        values = {
            INPUT_KEYS[key]: value
            for key, value in filtering.items()
            if value is not None
        }

        if 'order_by' in values:
            values['order_by'] = {
                field: SortingDirection.parse(direction)
                for field, direction in values['order_by'].items()
            }
        if 'filter' in values:
            values['filter'] = dict(values['filter'])

        return cls(**values)

    def dict(self) -> dict:
        """ Export the Filter Spec as a JSON-able dict """
        return {
            'limit': self.limit,
            'orderBy': {field: direction.value for field, direction in self.order_by.items()},
            'filter': dict(self.filter),
            'offset': self.offset,
            'index': self.index,
        }


# Mapping: input dict key => dataclass field name
INPUT_KEYS = {
    'limit': 'limit',
    'orderBy': 'order_by',
    'filter': 'filter',
    'offset': 'offset',
    'index': 'index',
}
