""" Which fields did the GraphQL query select? """

import graphql
from graphql.execution.collect_fields import collect_fields

from collections import abc
from typing import Union, Any, Optional


# Connection fields that cannot be produced without fetching the records
FETCHING_FIELDS = frozenset(('edges', 'pageInfo'))


def edges_requested(info: graphql.GraphQLResolveInfo) -> bool:
    """ Does the connection field select anything that requires a fetch?

    `pageInfo` counts, too: it cannot be computed without edges.
    Fragments are matched against the connection type.

    Example:
        async def resolve_articles(root, info, **args):
            if not edges_requested(info):
                return {'source': root, 'args': args}
    """
    connection_type = graphql.get_named_type(info.return_type)
    names = selected_field_names_from_info(info, runtime_type=connection_type)  # type: ignore[arg-type]
    return not FETCHING_FIELDS.isdisjoint(names)


def selected_field_names_from_info(info: graphql.GraphQLResolveInfo, runtime_type: Union[str, graphql.GraphQLObjectType] = None) -> abc.Iterator[str]:
    """ selected_field_names() for the field being resolved

    Lazy: errors are raised on iteration.

    Example:
        def resolve_article(obj, info):
            names = set(selected_field_names_from_info(info, 'Article'))
    """
    # Several nodes when the same field is selected more than once: `{ a { x } a { y } }`
    for field_node in info.field_nodes:
        yield from selected_field_names(
            info.schema,
            info.fragments,
            info.variable_values,
            field_node.selection_set,  # type: ignore[arg-type]
            runtime_type=runtime_type
        )


def selected_field_names(
        schema: graphql.GraphQLSchema,
        fragments: dict[str, graphql.FragmentDefinitionNode],
        variable_values: dict[str, Any],
        selection_set: Optional[graphql.SelectionSetNode], *,
        runtime_type: Union[str, graphql.GraphQLObjectType] = None) -> abc.Iterator[str]:
    """ Get the names of the fields selected one level below `selection_set`

    Fragment spreads and inline fragments are expanded when their type condition matches `runtime_type`.
    Fields excluded with @skip / @include are left out.
    Aliases are ignored: the schema name of every field is returned.

    Args:
        schema: The schema the query runs against
        fragments: Fragment definitions of the query document (info.fragments)
        variable_values: Query variables, for directive conditions (info.variable_values)
        selection_set: Where to look (info.field_nodes[0].selection_set). `None` for scalar fields.
        runtime_type: The object type (or its name) that fragments are matched against

    Raises:
        KeyError: `runtime_type` is not found in the schema
        RuntimeError: the selection has fragments, but `runtime_type` is not given

    Example:
        For `{ id author { name } title: headline }` it gives: 'id', 'author', 'headline'
    """
    if selection_set is None:
        return iter(())

    if isinstance(runtime_type, str):
        runtime_type = schema.type_map[runtime_type]  # type: ignore[assignment]  # raises: KeyError
    elif runtime_type is None:
        has_fragments = any(
            isinstance(node, (graphql.FragmentSpreadNode, graphql.InlineFragmentNode))
            for node in selection_set.selections
        )
        if has_fragments:
            raise RuntimeError('The selection contains fragments: provide `runtime_type` to match their type conditions')

        # Without fragments, there are no type conditions to match: any object type will do
        runtime_type = graphql.GraphQLObjectType('SelectionPlaceholder', {})

    fields_map = collect_fields(
        schema,
        fragments,
        variable_values,
        runtime_type,  # type: ignore[arg-type]
        selection_set,
    )

    return (
        field_node.name.value
        for field_nodes in fields_map.values()
        for field_node in field_nodes
    )
