import asyncio
import dataclasses

import pytest

from relaypage import exc
from relaypage.connection import (
    ConnectionAssembler, ConnectionSettings,
    FetchOptions, FetchMeta, FetchResult,
    OrderBy, OrderByEnum,
)
from relaypage.cursor import to_cursor, from_cursor, CursorData
from relaypage.filter_spec import SortingDirection

from .util.records import node_ids, cursor_indexes

ASC, DESC = SortingDirection.ASC, SortingDirection.DESC


# Sort orders for articles
ARTICLE_ORDERS = {
    'NEWEST': ('ctime', 'DESC'),
    'OLDEST': ('ctime', 'ASC'),
}


@pytest.mark.parametrize(('args', 'expected_options'), [
    # No window
    ({}, FetchOptions(order=OrderBy('id', ASC))),
    ({'first': 0}, FetchOptions(order=OrderBy('id', ASC))),
    # first
    ({'first': 10}, FetchOptions(offset=10, index=0, order=OrderBy('id', ASC), count=True)),
    ({'first': '10'}, FetchOptions(offset=10, index=0, order=OrderBy('id', ASC), count=True)),
    # first + after
    ({'first': 5, 'after': to_cursor('x', 5)}, FetchOptions(offset=10, index=5, order=OrderBy('id', ASC), count=True)),
    # last: the direction is inverted
    ({'last': 5}, FetchOptions(offset=5, index=0, order=OrderBy('id', DESC), count=True)),
    ({'last': 5, 'before': to_cursor('x', 20)}, FetchOptions(offset=25, index=20, order=OrderBy('id', DESC), count=True)),
    # first + last: "first" wins, not inverted
    ({'first': 3, 'last': 5}, FetchOptions(offset=3, index=0, order=OrderBy('id', ASC), count=True)),
    # orderBy: a list of pairs
    ({'orderBy': [('title', 'DESC')]}, FetchOptions(order=OrderBy('title', DESC))),
    ({'orderBy': [['title', 'desc'], ['id', 'asc']]}, FetchOptions(order=OrderBy('title', DESC))),
    ({'last': 1, 'orderBy': [OrderBy('title', DESC)]}, FetchOptions(offset=1, index=0, order=OrderBy('title', ASC), count=True)),
    # orderBy: a symbolic name
    ({'orderBy': 'ID'}, FetchOptions(order=OrderBy('id', ASC))),
    ({'orderBy': None}, FetchOptions(order=OrderBy('id', ASC))),
    ({'orderBy': []}, FetchOptions(order=OrderBy('id', ASC))),
])
def test_compute_fetch_options(args: dict, expected_options: FetchOptions):
    """ Pre-fetch: the window and the order """
    assembler = ConnectionAssembler()
    assert assembler.compute_fetch_options(args) == expected_options


@pytest.mark.parametrize(('args', 'expected_order'), [
    # Default: the first enum value
    ({}, OrderBy('ctime', DESC)),
    # Name
    ({'orderBy': 'OLDEST'}, OrderBy('ctime', ASC)),
    ({'orderBy': ['OLDEST']}, OrderBy('ctime', ASC)),
    # Backwards
    ({'last': 2}, OrderBy('ctime', ASC)),
    ({'last': 2, 'orderBy': 'OLDEST'}, OrderBy('ctime', DESC)),
])
def test_compute_fetch_options_order_enum(args: dict, expected_order: OrderBy):
    """ Pre-fetch: symbolic orders """
    assembler = ConnectionAssembler(ConnectionSettings(order_by=ARTICLE_ORDERS))
    assert assembler.compute_fetch_options(args).order == expected_order


@pytest.mark.parametrize(('args', 'expected_error'), [
    ({'orderBy': 'BOGUS'}, exc.InvalidOrderError),
    ({'orderBy': [('ctime', 'SIDEWAYS')]}, exc.InvalidOrderError),
    ({'orderBy': 42}, exc.InvalidOrderError),
    ({'first': 2, 'after': 'not-a-cursor'}, exc.MalformedCursorError),
    ({'first': 'abc'}, exc.PaginationArgumentError),
    ({'first': -1}, exc.PaginationArgumentError),
])
def test_compute_fetch_options_errors(args: dict, expected_error: type):
    """ Pre-fetch: invalid input """
    assembler = ConnectionAssembler(ConnectionSettings(order_by=ARTICLE_ORDERS))
    with pytest.raises(expected_error):
        assembler.compute_fetch_options(args)


def test_order_by_enum():
    """ OrderByEnum: name lookup """
    order_by = OrderByEnum(ARTICLE_ORDERS)

    assert order_by.names == ['NEWEST', 'OLDEST']
    assert order_by.default == OrderBy('ctime', DESC)
    assert order_by.lookup('OLDEST') == OrderBy('ctime', ASC)
    assert 'OLDEST' in order_by

    with pytest.raises(exc.InvalidOrderError) as e:
        order_by.lookup('id')
    assert e.value.name == 'id'


def test_fetch_options_hooks():
    """ Pre-fetch: settings customize the options """
    # count=False
    assembler = ConnectionAssembler(ConnectionSettings(count=False))
    assert assembler.compute_fetch_options({'first': 1}).count is False

    # `before` hook
    seen = []

    def before(options: FetchOptions, args: dict, context) -> FetchOptions:
        seen.append((args, context))
        return dataclasses.replace(options, count=False)

    assembler = ConnectionAssembler(ConnectionSettings(before=before))
    options = assembler.compute_fetch_options({'first': 1}, {'user': 'me'})
    assert options == FetchOptions(offset=1, index=0, order=OrderBy('id', ASC), count=False)
    assert seen == [({'first': 1}, {'user': 'me'})]

    # Override the callback
    class LimitedSettings(ConnectionSettings):
        def customize_fetch_options(self, options, args, context):
            options.offset = min(options.offset, 100)
            return options

    assembler = ConnectionAssembler(LimitedSettings())
    assert assembler.compute_fetch_options({'first': 500}).limit == 100


def rows(*ids: int, full_count: int = None) -> list[dict]:
    """ Make rows; put the count hint on the first one """
    res = [{'id': id} for id in ids]
    if res and full_count is not None:
        res[0]['fullCount'] = full_count
    return res


def test_assemble_connection_first_page():
    """ Post-fetch: the first page """
    assembler = ConnectionAssembler()
    args = {'first': 3}
    options = assembler.compute_fetch_options(args)

    connection = assembler.assemble_connection(rows(1, 2, 3, full_count=10), FetchMeta(options.offset, options.index, 'src'), args)

    assert connection['source'] == 'src'
    assert connection['args'] is args
    assert node_ids(connection) == [1, 2, 3]
    assert cursor_indexes(connection) == [0, 1, 2]
    assert [edge['source'] for edge in connection['edges']] == ['src'] * 3
    assert connection['pageInfo'] == {
        'startCursor': to_cursor(1, 0),
        'endCursor': to_cursor(3, 2),
        'hasPreviousPage': False,
        'hasNextPage': True,  # requested=3 < 10
    }


def test_assemble_connection_continued():
    """ Post-fetch: continue from a cursor """
    assembler = ConnectionAssembler()
    args = {'first': 3, 'after': to_cursor(3, 2)}
    options = assembler.compute_fetch_options(args)
    assert (options.offset, options.index) == (5, 2)

    connection = assembler.assemble_connection(FetchResult(rows(3, 4, 5), total_count=10), FetchMeta(options.offset, options.index), args)

    # Indexes continue from the cursor
    assert cursor_indexes(connection) == [3, 4, 5]
    assert from_cursor(connection['pageInfo']['startCursor']) == CursorData('3', 3)
    assert from_cursor(connection['pageInfo']['endCursor']) == CursorData('5', 5)

    # requested=(2+1)*3=9: less than 10, more than 3
    assert connection['pageInfo']['hasNextPage'] is True
    assert connection['pageInfo']['hasPreviousPage'] is True


def test_assemble_connection_empty():
    """ Post-fetch: nothing found """
    assembler = ConnectionAssembler()
    connection = assembler.assemble_connection([], FetchMeta(3, 0), {'first': 3})

    assert connection['edges'] == []
    assert connection['pageInfo'] == {
        'startCursor': None,
        'endCursor': None,
        'hasPreviousPage': False,
        'hasNextPage': False,
    }


def test_assemble_connection_backwards():
    """ Post-fetch: records fetched backwards are rendered in the user-facing order """
    assembler = ConnectionAssembler()
    args = {'last': 2}
    options = assembler.compute_fetch_options(args)
    assert options.order == OrderBy('id', DESC)

    # The data layer gives: newest first
    connection = assembler.assemble_connection(FetchResult(rows(5, 4), total_count=5), FetchMeta(options.offset, options.index), args)

    assert node_ids(connection) == [4, 5]
    assert connection['pageInfo']['hasNextPage'] is True  # requested=2 < 5
    assert connection['pageInfo']['hasPreviousPage'] is False


def test_resolve():
    """ resolve(): pre-fetch, fetch, post-fetch """
    fetched = []

    async def fetch(options: FetchOptions, source, args, context):
        fetched.append((options, source, context))
        await asyncio.sleep(0)
        return FetchResult(rows(1, 2), total_count=4)

    assembler = ConnectionAssembler()
    connection = asyncio.run(assembler.resolve('src', {'first': 2}, 'ctx', fetch=fetch, edges_requested=lambda: True))

    assert fetched == [(FetchOptions(offset=2, index=0, order=OrderBy('id', ASC), count=True), 'src', 'ctx')]
    assert node_ids(connection) == [1, 2]
    assert connection['pageInfo']['hasNextPage'] is True

    # A sync fetch function works as well
    def fetch_sync(options, source, args, context):
        return rows(1, full_count=1)

    connection = asyncio.run(assembler.resolve(None, {'first': 2}, fetch=fetch_sync))
    assert node_ids(connection) == [1]
    assert connection['pageInfo']['hasNextPage'] is False


def test_resolve_edges_not_requested():
    """ resolve(): no edges requested, no fetch """
    async def fetch(options, source, args, context):
        raise AssertionError('Must not be called')

    assembler = ConnectionAssembler()
    args = {'first': 2}
    connection = asyncio.run(assembler.resolve('src', args, fetch=fetch, edges_requested=lambda: False))

    assert connection == {'source': 'src', 'args': args}


def test_resolve_errors():
    """ resolve(): errors propagate """
    class DatabaseError(Exception):
        pass

    async def fetch(options, source, args, context):
        raise DatabaseError

    assembler = ConnectionAssembler()

    # Fetch failures: passed through
    with pytest.raises(DatabaseError):
        asyncio.run(assembler.resolve(None, {'first': 2}, fetch=fetch))

    # Bad input: fails before the fetch
    with pytest.raises(exc.MalformedCursorError):
        asyncio.run(assembler.resolve(None, {'first': 2, 'after': 'nope'}, fetch=fetch))


def test_resolve_after_hook():
    """ resolve(): the `after` hook replaces the post-fetch phase """
    def after(resultset, meta: FetchMeta, args, context):
        return {'source': meta.source, 'args': args, 'total': resultset.total_count, 'context': context}

    async def fetch(options, source, args, context):
        return FetchResult(rows(1), total_count=1)

    assembler = ConnectionAssembler(ConnectionSettings(after=after))
    connection = asyncio.run(assembler.resolve('src', {'first': 1}, 'ctx', fetch=fetch))
    assert connection == {'source': 'src', 'args': {'first': 1}, 'total': 1, 'context': 'ctx'}


def test_resolve_concurrently():
    """ resolve(): many requests in flight on one event loop, independent of one another """
    async def fetch(options: FetchOptions, source, args, context):
        # Let other requests run
        await asyncio.sleep(0.01 if options.index == 0 else 0)
        ids = range(options.index + 1, options.offset + 1)
        return FetchResult(rows(*ids), total_count=100)

    assembler = ConnectionAssembler()

    async def main():
        return await asyncio.gather(
            assembler.resolve('a', {'first': 2}, fetch=fetch),
            assembler.resolve('b', {'first': 3, 'after': to_cursor(10, 10)}, fetch=fetch),
        )

    first, second = asyncio.run(main())

    assert first['source'] == 'a'
    assert node_ids(first) == [1, 2]
    assert second['source'] == 'b'
    assert node_ids(second) == [11, 12, 13]
    assert cursor_indexes(second) == [11, 12, 13]


def test_both_cursors():
    """ "after" and "before" together: the window and the edges are anchored on "after" """
    assembler = ConnectionAssembler()
    args = {'first': 2, 'after': to_cursor('a', 3), 'before': to_cursor('b', 20)}

    options = assembler.compute_fetch_options(args)
    assert (options.offset, options.index) == (5, 3)

    connection = assembler.assemble_connection(FetchResult(rows(4, 5), total_count=30), FetchMeta(options.offset, options.index), args)
    assert cursor_indexes(connection) == [4, 5]
    assert assembler.anchor_cursor(args) == CursorData('a', 3)

    # Only "before"
    assert assembler.anchor_cursor({'last': 2, 'before': to_cursor('b', 20)}) == CursorData('b', 20)
    assert assembler.anchor_cursor({}) is None


def test_base_fetch_options():
    """ Base options: a preset `count` is kept; the object is not modified """
    assembler = ConnectionAssembler()

    base = FetchOptions(count=False)
    options = assembler.compute_fetch_options({'first': 3}, None, base)
    assert options == FetchOptions(offset=3, index=0, order=OrderBy('id', ASC), count=False)
    assert base == FetchOptions(count=False)

    # Not preset: from settings
    assert assembler.compute_fetch_options({'first': 3}, None, FetchOptions()).count is True

    # Through resolve()
    fetched = []

    def fetch(options: FetchOptions, source, args, context):
        fetched.append(options.count)
        return rows(1)

    asyncio.run(assembler.resolve(None, {'first': 1}, fetch=fetch, options=FetchOptions(count=False)))
    assert fetched == [False]


def test_assemble_connection_record_without_id():
    """ Records without an id cannot get cursors """
    assembler = ConnectionAssembler()

    with pytest.raises(exc.InvalidCursorIdError):
        assembler.assemble_connection([{'title': 'no id'}], FetchMeta(1, 0), {'first': 1})
