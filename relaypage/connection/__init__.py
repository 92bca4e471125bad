""" Relay connections: cursor pagination over an ordered result set """

from .types import ConnectionDict, EdgeDict, PageInfoDict
from .order import OrderBy, OrderByEnum, DEFAULT_ORDER_BY
from .options import FetchOptions, FetchMeta, FetchResult, FULL_COUNT_FIELD
from .edge import resolve_edge, edge_index
from .page_info import compute_page_info, read_total_count, EdgeInfo
from .settings import ConnectionSettings
from .assembler import ConnectionAssembler, get_window_size, is_backward
