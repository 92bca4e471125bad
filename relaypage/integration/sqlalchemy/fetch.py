""" Execute fetch options and filter specs with SqlAlchemy """

from __future__ import annotations

import logging
from typing import Any, Callable

import sqlalchemy as sa

from relaypage.connection import FetchOptions, FetchResult, FULL_COUNT_FIELD
from relaypage.filter_spec import FilterSpec, SortingDirection
from relaypage.typing import PaginationArgs

from .columns import resolve_column_by_name, SAModelOrAlias


logger = logging.getLogger(__name__)


def apply_fetch_options(stmt: sa.sql.Select, Model: SAModelOrAlias, options: FetchOptions) -> sa.sql.Select:
    """ Modify the Select statement: ORDER BY, the window, and the total count

    * ORDER BY the primary sort key
    * OFFSET `index` LIMIT `offset - index`, when a window is requested
    * count(*) OVER () AS "fullCount", when counting is requested

    Raises:
        exc.InvalidColumnError
    """
    if options.order is not None:
        column = resolve_column_by_name(options.order.field, Model, where='order')
        stmt = stmt.order_by(_sort_expression(column, options.order.direction))

    if options.count:
        stmt = stmt.add_columns(sa.func.count().over().label(FULL_COUNT_FIELD))

    if options.offset:
        logger.debug('Window: skip=%d, limit=%d', options.index or 0, options.limit)
        stmt = stmt.offset(options.index or 0).limit(options.limit)

    return stmt


def apply_filter_spec(stmt: sa.sql.Select, Model: SAModelOrAlias, spec: FilterSpec) -> sa.sql.Select:
    """ Modify the Select statement: WHERE, ORDER BY, LIMIT from a Filter Spec

    The result matches what QueryFilterBuilder.to_array() gives for in-memory lists.

    Raises:
        exc.InvalidColumnError
    """
    if spec.filter:
        stmt = stmt.filter(*(
            resolve_column_by_name(name, Model, where='filter') == value
            for name, value in spec.filter.items()
        ))

    if spec.order_by:
        stmt = stmt.order_by(*(
            _sort_expression(resolve_column_by_name(name, Model, where='orderBy'), direction)
            for name, direction in spec.order_by.items()
        ))

    return stmt.limit(max(spec.window_size, 0))


def fetch_page(connection: sa.engine.Connection, stmt: sa.sql.Select) -> FetchResult:
    """ Execute the statement and get the records, with the total count moved off the rows

    Rows are returned as dicts, so select columns, not entities.
    """
    rows = [dict(row) for row in connection.execute(stmt).mappings()]

    total_count = None
    if rows and FULL_COUNT_FIELD in rows[0]:
        total_count = int(rows[0][FULL_COUNT_FIELD])
        for row in rows:
            del row[FULL_COUNT_FIELD]

    return FetchResult(records=rows, total_count=total_count)


def statement_fetcher(connection: sa.engine.Connection, Model: SAModelOrAlias, stmt: sa.sql.Select) -> Callable[[FetchOptions, Any, PaginationArgs, Any], FetchResult]:
    """ Make a `fetch` callable for ConnectionAssembler that loads from a Select statement

    Example:
        fetch = statement_fetcher(connection, User, sa.select(User.id, User.login))
        connection = await assembler.resolve(None, {'first': 10}, fetch=fetch)
    """
    def fetch(options: FetchOptions, source: Any, args: PaginationArgs, context: Any) -> FetchResult:
        return fetch_page(connection, apply_fetch_options(stmt, Model, options))
    return fetch


def _sort_expression(column: sa.sql.ColumnElement, direction: SortingDirection) -> sa.sql.ColumnElement:
    if SortingDirection.parse(direction) == SortingDirection.DESC:
        return column.desc().nullslast()
    else:
        return column.asc().nullslast()
