__version__ = __import__('importlib.metadata').metadata.version('relaypage')

from .cursor import CursorCodec, CursorData
from .filter_spec import FilterSpec, QueryFilterBuilder, SortingDirection
from .connection import ConnectionAssembler, ConnectionSettings
from .connection import OrderBy, OrderByEnum
from .connection import FetchOptions, FetchMeta, FetchResult
from .connection import resolve_edge, compute_page_info
from .connection import ConnectionDict, EdgeDict, PageInfoDict
from .typing import PaginationArgs
from .util.dataclasses import NOTSET

from . import exc


# TODO: keyset pagination: anchor the window on the cursor's id instead of its index
