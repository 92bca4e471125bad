from __future__ import annotations

from typing import Union

import sqlalchemy as sa
import sqlalchemy.orm

from relaypage import exc


# Annotation for SqlAlchemy models or aliased classes
SAModelOrAlias = Union[type, sa.orm.util.AliasedClass]


def resolve_column_by_name(field_name: str, Model: SAModelOrAlias, *, where: str) -> sa.orm.InstrumentedAttribute:
    """ Get a column attribute by name, or fail

    Raises:
        exc.InvalidColumnError
    """
    # getattr() on an AliasedClass adapts the expression to use the aliased name
    try:
        attribute = getattr(Model, field_name)
    except AttributeError as e:
        raise exc.InvalidColumnError(model_name(Model), field_name, where=where) from e

    # Check that it actually is a column
    if not isinstance(attribute, sa.orm.QueryableAttribute) or not isinstance(attribute.property, sa.orm.ColumnProperty):
        raise exc.InvalidColumnError(model_name(Model), field_name, where=where)

    return attribute


def model_name(Model: SAModelOrAlias) -> str:
    """ Get the name of the Model for this class """
    # We can't do `Model.__name__` because we can be given an aliased class
    return sa.inspect(Model).class_.__name__
