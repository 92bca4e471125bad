""" Array connection: a Relay connection from a plain list """

from __future__ import annotations

from collections import abc
from typing import Optional

from graphql_relay import connection_from_array

from relaypage.connection.types import ConnectionDict


def connection_from_records(records: abc.Sequence, args: abc.Mapping) -> ConnectionDict:
    """ Make a Relay connection from a list of records

    Cursors are positions within `records`, so they are only stable as long as the list is.
    """
    connection = connection_from_array(records, {
        'first': _int_or_none(args.get('first')),
        'last': _int_or_none(args.get('last')),
        'before': args.get('before'),
        'after': args.get('after'),
    })
    page_info = connection.pageInfo

    return {
        'edges': [
            {'cursor': edge.cursor, 'node': edge.node}
            for edge in connection.edges
        ],
        'pageInfo': {
            'startCursor': page_info.startCursor,
            'endCursor': page_info.endCursor,
            'hasPreviousPage': page_info.hasPreviousPage,
            'hasNextPage': page_info.hasNextPage,
        },
    }


def _int_or_none(value) -> Optional[int]:
    return None if value is None else int(value)
