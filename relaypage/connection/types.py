""" Relay connection structures """

from __future__ import annotations

from typing import Any, Optional, TypedDict


class ConnectionDict(TypedDict, total=False):
    """ Relay Connection type: paginated list

    When edges were not requested, only `source` and `args` are present.
    """
    source: Any
    args: dict
    edges: list[EdgeDict]
    pageInfo: PageInfoDict


class EdgeDict(TypedDict, total=False):
    """ Relay Edge type: paginated item """
    cursor: str
    node: Any
    source: Any


class PageInfoDict(TypedDict):
    """ Relay Page Info """
    startCursor: Optional[str]
    endCursor: Optional[str]
    hasPreviousPage: bool
    hasNextPage: bool
