""" Edges: records with cursors """

from __future__ import annotations

from typing import Any, Optional

from relaypage import exc
from relaypage.cursor import CursorCodec, CursorData
from relaypage.cursor.cursor import default_codec
from relaypage.typing import Record, get_field

from .types import EdgeDict


def resolve_edge(record: Record, local_index: int, prior_cursor: Optional[CursorData], source: Any = None, *,
                 codec: CursorCodec = default_codec,
                 id_field: str = 'id',
                 ) -> EdgeDict:
    """ Make an edge: a record with its cursor

    Args:
        record: The record to wrap
        local_index: Position of the record within the current result set
        prior_cursor: The decoded cursor this page continues from, if any
        source: The parent object of the connection
        codec: Cursor codec
        id_field: The field with the record's identifier

    Raises:
        exc.InvalidCursorIdError: the record has no id, or the id cannot be put into a cursor
    """
    id = get_field(record, id_field)
    if id is None:
        raise exc.InvalidCursorIdError(id, f'the record has no "{id_field}" field')

    index = edge_index(local_index, prior_cursor)
    return {
        'cursor': codec.encode(id, index),
        'node': record,
        'source': source,
    }


def edge_index(local_index: int, prior_cursor: Optional[CursorData]) -> int:
    """ Get the position of a record within the overall ordered set

    Without a prior cursor, the local index is used as is.
    When continuing from a prior cursor, positions continue from its index, plus one.
    Index 0 is never emitted for a continued page: the first continued edge gets at least 1.
    """
    if prior_cursor is None:
        return local_index

    index = prior_cursor.index + local_index
    if index == 0:
        return 1
    else:
        return index + 1
