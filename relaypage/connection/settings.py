from __future__ import annotations

import dataclasses
from collections import abc
from typing import Any, Callable, Optional, Union, TYPE_CHECKING

from relaypage.cursor import CursorCodec

from .order import OrderByEnum, OrderBy, DEFAULT_ORDER_BY


if TYPE_CHECKING:
    from relaypage.typing import PaginationArgs
    from .options import FetchOptions, FetchMeta, FetchResult
    from .types import ConnectionDict


# Hook: customize fetch options before the fetch
BeforeHook = Callable[['FetchOptions', 'PaginationArgs', Any], 'FetchOptions']

# Hook: make a connection from the result set after the fetch
AfterHook = Callable[[Union['FetchResult', list], 'FetchMeta', 'PaginationArgs', Any], 'ConnectionDict']


@dataclasses.dataclass
class ConnectionSettings:
    """ Settings for a Connection

    This object defines how a connection paginates:
    which orders are available, how cursors are made, and which hooks customize the process.
    """
    # Connection name. Used to name GraphQL types: "<name>Connection", "<name>ConnectionOrder"
    name: Optional[str] = None

    # Available sort orders. The first one is the default.
    # A mapping { name => (field, direction) } is converted into an enum
    order_by: Union[OrderByEnum, abc.Mapping[str, Union[OrderBy, abc.Sequence]]] = DEFAULT_ORDER_BY

    # The field with the record's identifier: goes into cursors
    id_field: str = 'id'

    # Cursor codec
    codec: CursorCodec = dataclasses.field(default_factory=CursorCodec)

    # Ask the data layer to count the total number of matches when a window is requested
    count: bool = True

    # Hook: customize fetch options. Callable(options, args, context) -> options
    before: Optional[BeforeHook] = None

    # Hook: replace the post-fetch phase. Callable(resultset, meta, args, context) -> connection
    after: Optional[AfterHook] = None

    def __post_init__(self):
        if not isinstance(self.order_by, OrderByEnum):
            self.order_by = OrderByEnum(self.order_by)

    def customize_fetch_options(self, options: FetchOptions, args: PaginationArgs, context: Any) -> FetchOptions:
        """ Callback that customizes fetch options

        Used by: ConnectionAssembler, at the end of the pre-fetch phase.

        Default behavior: use the `before` hook, if provided
        You can override this method for custom behavior
        """
        if self.before is None:
            return options
        return self.before(options, args, context)
