from typing import Any

from sqlalchemy.util import symbol


# Marker for values not provided at all.
# Unlike `None`, `0`, `False`, or an empty collection, this one means "the argument was absent"
NOTSET = symbol('NOTSET')


def is_set(value: Any) -> bool:
    """ Check: was the value provided? Only NOTSET counts as "not provided" """
    return value is not NOTSET
