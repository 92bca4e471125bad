""" Order specification for connections """

from __future__ import annotations

from collections import abc
from typing import Any, NamedTuple, Union

from relaypage import exc
from relaypage.filter_spec.spec import SortingDirection
from relaypage.util.dataclasses import is_set


class OrderBy(NamedTuple):
    """ One sort key: (field, direction) """
    field: str
    direction: SortingDirection

    @classmethod
    def parse(cls, value: Union[OrderBy, abc.Sequence]) -> OrderBy:
        """ Get an OrderBy from a (field, direction) pair

        Raises:
            exc.InvalidOrderError
        """
        if isinstance(value, OrderBy):
            return value

        if isinstance(value, str) or not isinstance(value, abc.Sequence) or len(value) != 2:
            raise exc.InvalidOrderError(value, 'must be a (field, direction) pair')

        field, direction = value
        return cls(field=field, direction=SortingDirection.parse(direction))

    def inverted(self) -> OrderBy:
        """ Same field, opposite direction """
        return OrderBy(self.field, self.direction.inverted())


class OrderByEnum:
    """ Named sort orders available to a connection

    Built once, when the connection is configured.
    The first value is the default order.

    Example:
        OrderByEnum({
            'NEWEST': ('ctime', 'DESC'),
            'OLDEST': ('ctime', 'ASC'),
        })
    """
    # Mapping { symbolic name => OrderBy }
    values: dict[str, OrderBy]

    def __init__(self, values: abc.Mapping[str, Union[OrderBy, abc.Sequence]]):
        assert values, 'An order enum must have at least one value'
        self.values = {
            name: OrderBy.parse(value)
            for name, value in values.items()
        }

    __slots__ = 'values',

    def __repr__(self):
        return f'{type(self).__name__}({self.values!r})'

    def __contains__(self, name: str) -> bool:
        return name in self.values

    @property
    def names(self) -> list[str]:
        return list(self.values)

    @property
    def default(self) -> OrderBy:
        """ The default order: the first value """
        return next(iter(self.values.values()))

    def lookup(self, name: str) -> OrderBy:
        """ Find an order by its symbolic name

        Raises:
            exc.InvalidOrderError: not found
        """
        try:
            return self.values[name]
        except KeyError:
            raise exc.InvalidOrderError(name, f'expected one of: {", ".join(self.values)}')

    def resolve(self, order_by: Any) -> OrderBy:
        """ Get the primary sort key from an "orderBy" argument

        Accepts:
        * Nothing (NOTSET, None, empty list): the default order
        * A symbolic name: looked up in the enum
        * A list of (field, direction) pairs: the first pair is used
        * A single (field, direction) pair

        Raises:
            exc.InvalidOrderError
        """
        if not is_set(order_by) or not order_by:
            return self.default
        elif isinstance(order_by, str):
            return self.lookup(order_by)
        elif isinstance(order_by, abc.Sequence):
            first = order_by[0]
            # A single pair: ('id', 'ASC')
            if isinstance(first, str) and len(order_by) == 2 and first not in self.values:
                return OrderBy.parse(order_by)
            # A list of names: ['ID']
            elif isinstance(first, str):
                return self.lookup(first)
            # A list of pairs: [('id', 'ASC')]
            else:
                return OrderBy.parse(first)
        else:
            raise exc.InvalidOrderError(order_by, 'must be a name or a list of (field, direction) pairs')


# Default order for connections that have not configured their own
DEFAULT_ORDER_BY = OrderByEnum({
    'ID': ('id', 'ASC'),
})
