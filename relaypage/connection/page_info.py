""" Page info: is there anything before or after the current page? """

from __future__ import annotations

from collections import abc
from typing import NamedTuple, Optional, Union

from .options import FetchResult


class EdgeInfo(NamedTuple):
    """ Location of the page within the overall result set """
    has_next_page: bool
    has_previous_page: bool


def compute_page_info(resultset: Union[FetchResult, abc.Iterable], offset: Optional[int], index: Optional[int]) -> EdgeInfo:
    """ Compute `hasNextPage` and `hasPreviousPage`

    Args:
        resultset: The raw result set: a FetchResult, or a list with the "fullCount" hint on the first record
        offset: The absolute upper bound of the window. Empty: no window was requested
        index: The starting position of the window
    """
    # No window? No pages
    if not offset:
        return EdgeInfo(has_next_page=False, has_previous_page=False)

    index = index or 0
    limit = offset - index
    full_count = read_total_count(resultset)

    requested = (index + 1) * limit
    return EdgeInfo(
        has_next_page=requested < full_count,
        has_previous_page=requested > limit,
    )


def read_total_count(resultset: Union[FetchResult, abc.Iterable]) -> int:
    """ Get the total number of matches. 0 for an empty result set """
    result = FetchResult.ensure(resultset)

    if not result.records:
        return 0
    return result.total_count or 0
