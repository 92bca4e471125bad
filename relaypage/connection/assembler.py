""" Connection assembler: cursor pagination around a single fetch """

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections import abc
from typing import Any, Callable, Optional, Union

from relaypage import exc
from relaypage.cursor import CursorData
from relaypage.typing import PaginationArgs

from .edge import resolve_edge
from .options import FetchOptions, FetchMeta, FetchResult
from .page_info import compute_page_info
from .settings import ConnectionSettings
from .types import ConnectionDict


logger = logging.getLogger(__name__)


# Fetch: Callable(options, source, args, context) -> records
# It may be async. It may return a FetchResult, or a plain list of records
FetchCallable = Callable[[FetchOptions, Any, PaginationArgs, Any], Any]


class ConnectionAssembler:
    """ Connection Assembler: turns pagination arguments into a Relay connection

    It works in two phases around an external fetch:

    1. Pre-fetch: compute_fetch_options() decodes the cursor and computes the window and the order
    2. The data layer loads the records
    3. Post-fetch: assemble_connection() makes edges and page info

    Example:
        assembler = ConnectionAssembler(ConnectionSettings(order_by={'NEWEST': ('ctime', 'DESC')}))

        async def fetch(options: FetchOptions, source, args, context):
            return await load_articles(order=options.order, skip=options.index, limit=options.limit)

        connection = await assembler.resolve(None, {'first': 10}, context, fetch=fetch)
    """
    settings: ConnectionSettings

    def __init__(self, settings: Optional[ConnectionSettings] = None):
        self.settings = settings or ConnectionSettings()

    __slots__ = 'settings',

    async def resolve(self, source: Any, args: PaginationArgs, context: Any = None, *,
                      fetch: FetchCallable,
                      edges_requested: Optional[Callable[[], bool]] = None,
                      options: Optional[FetchOptions] = None,
                      ) -> ConnectionDict:
        """ Resolve a connection: compute options, fetch, assemble

        Args:
            source: The parent object
            args: Pagination arguments: first, last, before, after, orderBy
            context: Request context, passed to hooks and to `fetch`
            fetch: The data layer call. Callable(options, source, args, context) -> records. May be async.
            edges_requested: Predicate: were edges requested? If not, nothing is fetched.
            options: Base fetch options, e.g. `FetchOptions(count=False)` to skip counting for this request

        Raises:
            exc.MalformedCursorError: invalid "before"/"after"
            exc.InvalidOrderError: invalid "orderBy"
            exc.PaginationArgumentError: invalid "first"/"last"
        """
        # Nothing to paginate? Don't fetch.
        if edges_requested is not None and not edges_requested():
            logger.debug('Edges not requested: skipping the fetch')
            return {'source': source, 'args': args}

        # Pre-fetch
        options = self.compute_fetch_options(args, context, options)
        logger.debug('Fetch options: %r', options)

        # Fetch
        resultset = fetch(options, source, args, context)
        if inspect.isawaitable(resultset):
            resultset = await resultset

        # Post-fetch
        meta = FetchMeta(offset=options.offset, index=options.index, source=source)
        return self.after(resultset, meta, args, context)

    # region Pre-fetch

    def compute_fetch_options(self, args: PaginationArgs, context: Any = None, options: Optional[FetchOptions] = None) -> FetchOptions:
        """ Pre-fetch phase: compute the window and the order from pagination arguments

        Args:
            args: Pagination arguments
            context: Request context, passed to the `before` hook
            options: Base options. A `count` set here is kept as is. The object is not modified.

        Raises:
            exc.MalformedCursorError: invalid "before"/"after"
            exc.InvalidOrderError: invalid "orderBy"
            exc.PaginationArgumentError: invalid "first"/"last"
        """
        options = dataclasses.replace(options) if options is not None else FetchOptions()

        # Window
        window_size = get_window_size(args)
        if window_size:
            if options.count is None:
                options.count = self.settings.count

            cursor = self.anchor_cursor(args)
            if cursor is not None:
                options.offset = window_size + cursor.index
                options.index = cursor.index
            else:
                options.offset = window_size
                options.index = 0

        # Order
        order = self.settings.order_by.resolve(args.get('orderBy'))

        # Paginating backwards: fetch in the opposite direction
        if is_backward(args):
            order = order.inverted()

        options.order = order

        # Customize
        return self.before(options, args, context)

    def before(self, options: FetchOptions, args: PaginationArgs, context: Any) -> FetchOptions:
        """ Hook: customize fetch options """
        return self.settings.customize_fetch_options(options, args, context)

    # endregion

    # region Post-fetch

    def after(self, resultset: Union[FetchResult, list], meta: FetchMeta, args: PaginationArgs, context: Any) -> ConnectionDict:
        """ Hook: make a connection from the result set

        Default behavior: use the `after` hook from settings, or assemble_connection()
        """
        if self.settings.after is not None:
            return self.settings.after(resultset, meta, args, context)
        return self.assemble_connection(resultset, meta, args)

    def assemble_connection(self, resultset: Union[FetchResult, abc.Iterable], meta: FetchMeta, args: PaginationArgs) -> ConnectionDict:
        """ Post-fetch phase: make edges and page info

        Args:
            resultset: Fetched records: a FetchResult, or a list with the "fullCount" hint on the first record
            meta: Window information from the pre-fetch phase, and the source object
            args: Pagination arguments

        Raises:
            exc.MalformedCursorError: invalid "before"/"after"
            exc.InvalidCursorIdError: a record id cannot be put into a cursor
        """
        # Read the count before records are wrapped into edges
        result = FetchResult.ensure(resultset)
        edge_info = compute_page_info(result, meta.offset, meta.index)

        # Records fetched backwards are rendered in the user-facing order
        records = result.records
        if is_backward(args):
            records = records[::-1]

        # Edges
        cursor = self.anchor_cursor(args)
        edges = [
            resolve_edge(record, idx, cursor, meta.source, codec=self.settings.codec, id_field=self.settings.id_field)
            for idx, record in enumerate(records)
        ]

        return {
            'source': meta.source,
            'args': args,
            'edges': edges,
            'pageInfo': {
                'startCursor': edges[0]['cursor'] if edges else None,
                'endCursor': edges[-1]['cursor'] if edges else None,
                'hasPreviousPage': edge_info.has_previous_page,
                'hasNextPage': edge_info.has_next_page,
            },
        }

    # endregion

    def anchor_cursor(self, args: PaginationArgs) -> Optional[CursorData]:
        """ Decode the cursor the window is anchored on: "after", or else "before"

        Both phases use it, so the window and the edge positions come from the same cursor.

        Raises:
            exc.MalformedCursorError
        """
        return self.decode_cursor(args.get('after') or args.get('before'))

    def decode_cursor(self, cursor: Optional[str]) -> Optional[CursorData]:
        """ Decode a cursor, if given

        Raises:
            exc.MalformedCursorError
        """
        if not cursor:
            return None
        return self.settings.codec.decode(cursor)


def get_window_size(args: PaginationArgs) -> Optional[int]:
    """ Get the window size from "first" or "last"

    Raises:
        exc.PaginationArgumentError: not a non-negative integer
    """
    for name in ('first', 'last'):
        value = args.get(name)
        if not value:
            continue

        try:
            window_size = int(value)
        except (TypeError, ValueError):
            raise exc.PaginationArgumentError(name, f'{value!r} is not an integer')

        if window_size < 0:
            raise exc.PaginationArgumentError(name, 'must be non-negative')
        return window_size

    return None


def is_backward(args: PaginationArgs) -> bool:
    """ Is it backward pagination: "last" without "first"? """
    return bool(args.get('last')) and not args.get('first')
