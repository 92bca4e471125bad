""" Fetch options: what the data layer gets, and what it returns """

from __future__ import annotations

import dataclasses
from collections import abc
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional, Union

from relaypage.typing import get_field

from .order import OrderBy


# Name of the count hint field: the total number of matches, ignoring the window
FULL_COUNT_FIELD = 'fullCount'


@dataclass
class FetchOptions:
    """ Fetch options: the window and the order to load

    The data layer is expected to load records [index, offset) of the ordered set.
    """
    # The absolute upper bound of the window
    offset: Optional[int] = None

    # Zero-based starting position of the window
    index: Optional[int] = None

    # Primary sort key
    order: Optional[OrderBy] = None

    # Shall the data layer count the total number of matches?
    count: Optional[bool] = None

    @property
    def limit(self) -> Optional[int]:
        """ The window size: `offset - index` """
        if self.offset is None:
            return None
        return self.offset - (self.index or 0)

    def dict(self) -> dict:
        return dataclasses.asdict(self)


class FetchMeta(NamedTuple):
    """ Information about the fetch, given to the post-fetch phase """
    offset: Optional[int]
    index: Optional[int]
    source: Any = None


@dataclass
class FetchResult:
    """ The result of a fetch: the records and, optionally, the total count """
    # The records within the window
    records: list

    # The total number of matches, ignoring the window. `None` if not counted
    total_count: Optional[int] = None

    @classmethod
    def ensure(cls, resultset: Union[FetchResult, abc.Iterable]) -> FetchResult:
        """ Get a FetchResult from a FetchResult or from a plain list of records

        A plain list may carry the count hint on its first record: the "fullCount" field
        """
        if isinstance(resultset, FetchResult):
            return resultset

        records = list(resultset)
        return cls(records=records, total_count=read_count_hint(records))


def read_count_hint(records: abc.Sequence) -> int:
    """ Read the total count from the "fullCount" field of the first record. 0 if not available """
    if not records:
        return 0

    full_count = get_field(records[0], FULL_COUNT_FIELD)
    if not full_count:
        return 0
    return int(full_count)
