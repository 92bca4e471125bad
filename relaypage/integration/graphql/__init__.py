""" Integration with GraphQL: graphql-core """

# High-level APIs
from .connection import RelayConnection, order_by_enum_type, relay_connection_args
from .selection import edges_requested

# Lower-level APIs
from .selection import selected_field_names, selected_field_names_from_info
