""" Filter builder: the fluent interface """

from __future__ import annotations

import dataclasses
from collections import abc
from typing import Any, Callable, Optional, Union

from relaypage import exc
from relaypage.connection.types import ConnectionDict
from relaypage.util.dataclasses import NOTSET, is_set

from .spec import FilterSpec, SortingDirection
from .materialize import materialize, is_array, is_record
from .array_connection import connection_from_records


class QueryFilterBuilder:
    """ Filter Builder: accumulate limit, order, and filter intent; then apply it to results.

    Every method returns a new builder; the original one is left intact.
    This way, a partially built filter can be reused in different conditional branches.

    Example:
        users = QueryFilterBuilder(rows)
        users = users.filter({'active': True}).order_by('ctime', 'DESC').limit(10)
        users.to_array()

    Example:
        Optional arguments: use when() to keep the chain going

        def resolve_users(root, info, role=NOTSET):
            return (
                QueryFilterBuilder(rows)
                .when(role, lambda q: q.filter({'role': role}))
                .to_array()
            )
    """
    # The collection to filter: a list of records, or a single record
    results: Any

    # Accumulated intent
    spec: FilterSpec

    def __init__(self, results: Any, filtering: Union[FilterSpec, abc.Mapping, None] = None):
        """ Prepare to filter `results`

        Args:
            results: A list of records, or a single record
            filtering: Initial Filter Spec, or a partial dict with its fields.
                Every field not mentioned keeps its default.
        """
        self.results = results
        self.spec = filtering if isinstance(filtering, FilterSpec) else FilterSpec.from_dict(filtering)

    __slots__ = 'results', 'spec'

    def __repr__(self):
        return f'{type(self).__name__}({self.spec!r})'

    # region Builder

    def limit(self, limit: Optional[int]) -> QueryFilterBuilder:
        """ Set the limit. Empty values (None, 0) keep the current limit """
        if not limit:
            return self
        return self._replace(limit=int(limit))

    def order_by(self, field: str, direction: Union[str, SortingDirection] = SortingDirection.ASC) -> QueryFilterBuilder:
        """ Add a sort field. Fields added earlier have higher priority.

        Re-adding the same field replaces its direction but keeps its priority.

        Raises:
            exc.InvalidOrderError: invalid direction
        """
        return self._replace(order_by={
            **self.spec.order_by,
            field: SortingDirection.parse(direction),
        })

    def filter(self, predicates: Optional[abc.Mapping[str, Any]]) -> QueryFilterBuilder:
        """ Add equality predicates: { field: value }. Later calls override overlapping keys.

        Raises:
            exc.FilterSpecError: not a mapping
        """
        if predicates is None:
            return self
        if not isinstance(predicates, abc.Mapping):
            raise exc.FilterSpecError(f'"filter" must be an object, "{type(predicates).__name__}" given')

        return self._replace(filter={
            **self.spec.filter,
            **predicates,
        })

    def filter_if(self, condition: bool, predicates: Optional[abc.Mapping[str, Any]]) -> QueryFilterBuilder:
        """ Add equality predicates, but only if `condition` is true """
        if not condition:
            return self
        return self.filter(predicates)

    def when(self, value: Any, apply: Callable[[QueryFilterBuilder], QueryFilterBuilder]) -> QueryFilterBuilder:
        """ Apply a function to the builder, but only if `value` was provided

        Optional GraphQL arguments are often absent. This function keeps the chain going:
        `apply(builder)` is called only when `value` is not NOTSET.
        Note that `None`, `0`, `False`, and empty collections all count as provided values.

        Args:
            value: The value to check
            apply: Callable(builder) -> builder
        """
        if not is_set(value):
            return self
        return apply(self)

    def from_args(self, args: abc.Mapping) -> QueryFilterBuilder:
        """ Apply connection arguments: "filter", "orderBy", "offset"

        * "filter" is applied unconditionally
        * "orderBy", a (field, direction) pair, is applied when present
        * "offset" sets the limit
        """
        order_by = args.get('orderBy', NOTSET)
        if order_by is None:
            order_by = NOTSET

        return (
            self
            .filter(args.get('filter') or {})
            .when(order_by, lambda q: q.order_by(*_order_pair(order_by)))
            # NOTE: "offset" is the limit here, not a window bound
            .limit(args.get('offset'))
        )

    # endregion

    # region Results

    def to_array(self) -> list:
        """ Get the list of records: ordered, filtered, limited """
        return materialize(self.results, self.spec)

    def to_object(self) -> Any:
        """ Get one record

        If the results are a single record, it is returned as is.
        If the results are a list, the first filtered record is returned, or an empty dict.

        Raises:
            exc.TransformError: results are neither a record nor a list
        """
        if is_record(self.results):
            return self.results
        if is_array(self.results):
            records = self.to_array()
            return records[0] if records else {}

        raise exc.TransformError(self.results)

    def to_connection_array(self, args: Optional[abc.Mapping] = None) -> ConnectionDict:
        """ Get the records as a Relay connection, paginated with `args`: first, last, before, after

        This is a simple array slice: cursors are positions within the materialized list
        """
        return connection_from_records(self.to_array(), args or {})

    # endregion

    def _replace(self, **changes) -> QueryFilterBuilder:
        return type(self)(self.results, dataclasses.replace(self.spec, **changes))


def _order_pair(order_by: Any) -> tuple[str, Any]:
    """ Get (field, direction) from an "orderBy" argument """
    if isinstance(order_by, str):
        return order_by, SortingDirection.ASC
    if isinstance(order_by, abc.Sequence) and len(order_by) == 2:
        field, direction = order_by
        return field, direction

    raise exc.FilterSpecError(f'"orderBy" must be a (field, direction) pair, {order_by!r} given')
