""" Opaque cursors

A cursor anchors a pagination window to a specific record and its position within the ordered result set.
"""

from .codec import TextCodec, Base64Codec
from .cursor import CursorData, CursorCodec, CURSOR_PREFIX, CURSOR_SEPARATOR
from .cursor import to_cursor, from_cursor
