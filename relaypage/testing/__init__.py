""" Tools for testing """

from .recreate_tables import created_tables, create_tables, drop_tables
from .table_data import insert
from .graphql import graphql_query, graphql_query_sync
