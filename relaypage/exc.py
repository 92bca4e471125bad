from typing import Any


class BaseRelayPageError(Exception):
    pass


class MalformedCursorError(BaseRelayPageError):
    """ The cursor could not be decoded

    Reported when the User gives a cursor that this library has not produced.
    Pagination cannot proceed without a valid window anchor.
    """

    def __init__(self, cursor: Any, reason: str):
        self.cursor = cursor
        self.reason = reason

        super().__init__(f'Malformed cursor {cursor!r}: {reason}')


class InvalidOrderError(BaseRelayPageError):
    """ Invalid sort order requested

    Reported when a symbolic `orderBy` name is not found in the configured enum,
    or when an order direction is neither ASC nor DESC
    """

    def __init__(self, name: Any, err: str = 'unknown sort order'):
        self.name = name

        super().__init__(f'Invalid order {name!r}: {err}')


class TransformError(BaseRelayPageError):
    """ Results could not be converted to the requested shape """

    def __init__(self, value: Any):
        self.value = value

        super().__init__(f"Couldn't transform result to object: {type(value).__name__} given")


class FilterSpecError(BaseRelayPageError):
    """ Invalid input provided to the filter builder """

    def __init__(self, err: str):
        super().__init__(f'Filter spec error: {err}')


class InvalidColumnError(BaseRelayPageError):
    """ A field mentioned by name is not found on the SqlAlchemy model """

    def __init__(self, model: str, column_name: str, where: str):
        self.model = model
        self.column_name = column_name
        self.where = where

        super().__init__(f'Invalid column "{column_name}" for "{model}" specified in {where}')


class PaginationArgumentError(BaseRelayPageError):
    """ A pagination argument from the request could not be parsed """

    def __init__(self, argument_name: str, error: str):
        self.argument_name = argument_name

        super().__init__(f'Pagination argument `{argument_name}` parsing failed: {error}')


class InvalidCursorIdError(BaseRelayPageError):
    """ A record id cannot be put into a cursor

    Reported when the id contains the cursor separator, or when the record has no id at all.
    Such a cursor would not identify its record when it comes back.
    """

    def __init__(self, id: Any, reason: str):
        self.id = id
        self.reason = reason

        super().__init__(f'Cannot make a cursor for id {id!r}: {reason}')
