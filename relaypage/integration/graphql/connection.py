""" Relay connection fields for graphql-core schemas """

from __future__ import annotations

from typing import Any, Optional

import graphql
from graphql_relay import connection_definitions, connection_args

from relaypage.connection import ConnectionAssembler, ConnectionSettings, ConnectionDict, OrderByEnum
from relaypage.connection.assembler import FetchCallable

from .selection import edges_requested


class RelayConnection:
    """ A Relay connection field: GraphQL types, arguments, and a resolver

    Example:
        articles = RelayConnection(ArticleType, fetch_articles, ConnectionSettings(
            name='Article',
            order_by={'NEWEST': ('ctime', 'DESC'), 'OLDEST': ('ctime', 'ASC')},
        ))

        QueryType = graphql.GraphQLObjectType('Query', {
            'articles': articles.field(),
        })
    """
    # Pagination settings
    settings: ConnectionSettings

    # The data layer call
    fetch: FetchCallable

    # Pagination engine
    assembler: ConnectionAssembler

    # GraphQL types
    edge_type: graphql.GraphQLObjectType
    connection_type: graphql.GraphQLObjectType
    order_by_type: graphql.GraphQLEnumType

    # GraphQL field arguments
    args: graphql.GraphQLArgumentMap

    def __init__(self, node_type: graphql.GraphQLObjectType, fetch: FetchCallable, settings: Optional[ConnectionSettings] = None, *,
                 edge_fields: graphql.GraphQLFieldMap = None,
                 connection_fields: graphql.GraphQLFieldMap = None,
                 ):
        self.settings = settings or ConnectionSettings()
        self.fetch = fetch
        self.assembler = ConnectionAssembler(self.settings)

        name = self.settings.name or node_type.name
        self.edge_type, self.connection_type = connection_definitions(
            node_type,
            name,
            edge_fields=edge_fields,
            connection_fields=connection_fields,
        )
        self.order_by_type = order_by_enum_type(f'{name}ConnectionOrder', self.settings.order_by)  # type: ignore[arg-type]
        self.args = relay_connection_args(self.order_by_type)

    async def resolve(self, source: Any, info: graphql.GraphQLResolveInfo, **args) -> ConnectionDict:
        """ Field resolver: fetch only if edges are selected """
        return await self.assembler.resolve(
            source, args, info.context,
            fetch=self.fetch,
            edges_requested=lambda: edges_requested(info),
        )

    def field(self, description: Optional[str] = None) -> graphql.GraphQLField:
        """ Get a GraphQL field for this connection """
        return graphql.GraphQLField(
            self.connection_type,
            args=self.args,
            resolve=self.resolve,
            description=description,
        )


def order_by_enum_type(name: str, order_by: OrderByEnum) -> graphql.GraphQLEnumType:
    """ Make a GraphQL enum from an order enum. Internal values are (field, direction) pairs """
    return graphql.GraphQLEnumType(name, {
        value_name: graphql.GraphQLEnumValue(value)
        for value_name, value in order_by.values.items()
    })


def relay_connection_args(order_by_type: graphql.GraphQLEnumType) -> graphql.GraphQLArgumentMap:
    """ Connection arguments: first, last, before, after, orderBy """
    return {
        **connection_args,
        'orderBy': graphql.GraphQLArgument(graphql.GraphQLList(order_by_type)),
    }
