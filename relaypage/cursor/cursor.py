from __future__ import annotations

from typing import Any, NamedTuple, Optional

from relaypage import exc

from .codec import TextCodec, Base64Codec


# Cursor payload: <prefix><sep><id><sep><index>
CURSOR_SEPARATOR = '$'
CURSOR_PREFIX = 'arrayconnection' + CURSOR_SEPARATOR


class CursorData(NamedTuple):
    """ Cursor data: what a cursor contains """
    # Identifier of the record the cursor points to
    id: str

    # Position of the record within the overall ordered set
    index: int


class CursorCodec:
    """ Encode and decode opaque pagination cursors

    Example:
        codec = CursorCodec()
        cursor = codec.encode('user-1', 5)
        codec.decode(cursor)  #-> CursorData(id='user-1', index=5)
    """
    # The opaque transform
    text_codec: TextCodec

    def __init__(self, text_codec: Optional[TextCodec] = None):
        self.text_codec = text_codec or Base64Codec()

    __slots__ = 'text_codec',

    def encode(self, id: Any, index: int) -> str:
        """ Make a cursor from a record id and its position

        Raises:
            exc.InvalidCursorIdError: the id contains the separator
        """
        if CURSOR_SEPARATOR in str(id):
            raise exc.InvalidCursorIdError(id, f'the id must not contain "{CURSOR_SEPARATOR}"')
        return self.text_codec.encode(f'{CURSOR_PREFIX}{id}{CURSOR_SEPARATOR}{index}')

    def decode(self, cursor: str) -> CursorData:
        """ Decode a cursor into its component parts

        Raises:
            exc.MalformedCursorError
        """
        if not isinstance(cursor, str):
            raise exc.MalformedCursorError(cursor, 'cursor must be a string')

        # Remove the opaque layer
        try:
            payload = self.text_codec.decode(cursor)
        except ValueError as e:
            raise exc.MalformedCursorError(cursor, 'not an encoded cursor') from e

        # Strip the prefix
        if not payload.startswith(CURSOR_PREFIX):
            raise exc.MalformedCursorError(cursor, 'unknown cursor type')
        payload = payload[len(CURSOR_PREFIX):]

        # Split: exactly two fields
        parts = payload.split(CURSOR_SEPARATOR)
        if len(parts) != 2:
            raise exc.MalformedCursorError(cursor, f'expected 2 fields, got {len(parts)}')
        id, index = parts

        # The index is an integer
        try:
            return CursorData(id=id, index=int(index))
        except ValueError as e:
            raise exc.MalformedCursorError(cursor, f'index {index!r} is not an integer') from e


# Default codec: base64
default_codec = CursorCodec()


def to_cursor(id: Any, index: int) -> str:
    """ Make a cursor using the default codec """
    return default_codec.encode(id, index)


def from_cursor(cursor: str) -> CursorData:
    """ Decode a cursor using the default codec

    Raises:
        exc.MalformedCursorError
    """
    return default_codec.decode(cursor)
