import fastapi
import json
from typing import Optional, Any

from relaypage import exc
from relaypage.typing import PaginationArgs


def pagination_args(*,
        first: Optional[int] = fastapi.Query(
            None,
            title='Pagination. The number of items to include from the start of the window.',
        ),
        last: Optional[int] = fastapi.Query(
            None,
            title='Pagination. The number of items to include from the end of the window.',
        ),
        before: Optional[str] = fastapi.Query(
            None,
            title='Pagination. Cursor: load the items before this one.',
        ),
        after: Optional[str] = fastapi.Query(
            None,
            title='Pagination. Cursor: load the items after this one.',
        ),
        order_by: Optional[str] = fastapi.Query(
            None,
            alias='orderBy',
            title='Sorting order',
            description='Symbolic name, or a JSON list of pairs. Example: `NEWEST`, `[["ctime", "DESC"]]`.',
        ),
) -> PaginationArgs:
    """ Get Relay pagination arguments from the request parameters

    Only the parameters that were provided are included.

    Example:
        /api/articles?first=10&after=YXJyYXljb25uZWN0aW9uJDEwJDk=&orderBy=NEWEST

    Raises:
        exc.PaginationArgumentError
    """
    args: PaginationArgs = {}

    if first is not None:
        args['first'] = first
    if last is not None:
        args['last'] = last
    if before is not None:
        args['before'] = before
    if after is not None:
        args['after'] = after
    if order_by is not None:
        args['orderBy'] = parse_order_by_argument('orderBy', order_by)

    return args


def parse_order_by_argument(name: str, value: str) -> Any:
    """ Parse "orderBy": a symbolic name, or a JSON list of [field, direction] pairs """
    # Symbolic name
    if not value.startswith('['):
        return value

    # JSON
    try:
        order_by = json.loads(value)
    except json.JSONDecodeError as e:
        raise exc.PaginationArgumentError(name, f'Malformed JSON: {e}') from e

    if not all(isinstance(pair, list) and len(pair) == 2 for pair in order_by):
        raise exc.PaginationArgumentError(name, 'must be a list of [field, direction] pairs')

    return order_by
