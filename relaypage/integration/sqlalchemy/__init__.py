""" Integration with SqlAlchemy: the data layer that executes fetch options and filter specs """

from .columns import resolve_column_by_name
from .fetch import apply_fetch_options, apply_filter_spec, fetch_page, statement_fetcher
