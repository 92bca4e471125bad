from __future__ import annotations

import base64
import binascii
from typing import Protocol


class TextCodec(Protocol):
    """ A reversible text-safe transform: makes a string opaque, and back """

    def encode(self, value: str) -> str: ...

    def decode(self, value: str) -> str:
        """ Decode, or fail

        Raises:
            ValueError: the value was not produced by encode()
        """


class Base64Codec:
    """ Opaque transform: base64 over UTF-8 """

    def encode(self, value: str) -> str:
        return base64.b64encode(value.encode()).decode()

    def decode(self, value: str) -> str:
        try:
            return base64.b64decode(value.encode(), validate=True).decode()
        except (binascii.Error, UnicodeError) as e:
            raise ValueError(str(e)) from e
