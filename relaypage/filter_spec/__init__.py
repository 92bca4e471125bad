""" Filter spec: accumulated limit/order/filter intent

A FilterSpec is built through the fluent QueryFilterBuilder, and then either materialized
against an in-memory collection, or handed to a data layer that executes it.
"""

from .spec import FilterSpec, SortingDirection, DEFAULT_LIMIT
from .builder import QueryFilterBuilder
from .materialize import materialize, sort_records, filter_records, is_array, is_record
from .array_connection import connection_from_records
