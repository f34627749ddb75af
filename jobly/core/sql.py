"""
Partial-update SQL helpers.

Turns a mapping of domain field names to new values into a parameterized
SET clause. Values never appear in the SQL text; they travel separately as
bind parameters named p1..pN for sqlalchemy.text().

Entities describe their updatable fields with ColumnField; the translation
table handed to sql_for_partial_update is derived from those descriptors.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Type

from pydantic import BaseModel, ValidationError

from jobly.core.errors import (
    ImmutableFieldError,
    InvalidFieldValueError,
    NoFieldsError,
    UnknownFieldError,
)


def placeholder(index: int) -> str:
    """Bind parameter name for 1-based position `index`"""
    return f"p{index}"


@dataclass(frozen=True)
class ColumnField:
    """
    Describes one domain field of an entity.

    name is the domain (API) name, column the storage column, types the
    accepted Python value types. None is always accepted when nullable.
    """
    name: str
    column: str
    types: Tuple[type, ...]
    nullable: bool = True
    mutable: bool = True

    def accepts(self, value: Any) -> bool:
        if value is None:
            return self.nullable
        # bool is an int subclass; only allow it where bool is declared
        if isinstance(value, bool) and bool not in self.types:
            return False
        return isinstance(value, self.types)


def column_map(fields: Iterable[ColumnField]) -> Dict[str, str]:
    """Domain name -> column name translation table"""
    return {f.name: f.column for f in fields}


def check_update_fields(data: Mapping[str, Any], fields: Iterable[ColumnField]) -> None:
    """
    Reject update data that does not fit an entity's field descriptors.

    Raises:
        UnknownFieldError: Key is not a field of the entity
        ImmutableFieldError: Field cannot change after creation
        InvalidFieldValueError: Value is not one of the field's types
    """
    by_name = {f.name: f for f in fields}
    for name, value in data.items():
        field = by_name.get(name)
        if field is None:
            raise UnknownFieldError(name)
        if not field.mutable:
            raise ImmutableFieldError(name)
        if not field.accepts(value):
            raise InvalidFieldValueError(name, value)


def check_update_values(data: Mapping[str, Any], schema: Type[BaseModel]) -> None:
    """
    Apply an entity's value constraints (lengths, bounds) to update data.

    Raises:
        InvalidFieldValueError: First field the schema rejects
    """
    try:
        schema.model_validate(dict(data))
    except ValidationError as e:
        loc = e.errors()[0]["loc"]
        name = str(loc[0]) if loc else next(iter(data))
        raise InvalidFieldValueError(name, data.get(name))


@dataclass(frozen=True)
class Assignment:
    column: str
    index: int
    value: Any

    def render(self) -> str:
        return f'"{self.column}"=:{placeholder(self.index)}'


@dataclass(frozen=True)
class PartialUpdate:
    assignments: Tuple[Assignment, ...]
    values: List[Any]

    @property
    def set_cols(self) -> str:
        # {firstName: 'Aliya', age: 32} => '"first_name"=:p1, "age"=:p2'
        return ", ".join(a.render() for a in self.assignments)

    @property
    def params(self) -> Dict[str, Any]:
        return {placeholder(a.index): a.value for a in self.assignments}


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    field_to_column: Mapping[str, str],
) -> PartialUpdate:
    """
    Build the SET clause for a partial update.

    Args:
        data_to_update: Domain field name -> new value. Explicit None means
            "set to NULL" and is kept.
        field_to_column: Domain field name -> column name. Fields missing
            from the table use their domain name as the column.

    Returns:
        PartialUpdate with one assignment per key, in input order

    Raises:
        NoFieldsError: If data_to_update is empty
    """
    if not data_to_update:
        raise NoFieldsError()

    assignments = tuple(
        Assignment(column=field_to_column.get(name, name), index=idx, value=value)
        for idx, (name, value) in enumerate(data_to_update.items(), start=1)
    )
    return PartialUpdate(
        assignments=assignments,
        values=[a.value for a in assignments],
    )
