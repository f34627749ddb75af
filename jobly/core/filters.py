"""
Filter-query builder for collection listings.

Each entity kind declares a whitelist of filters. A filter maps to one
predicate fragment; the fragments of the supplied filters are joined with
AND and their bind parameters numbered p1..pN once, at the end.

Everything here is pure. Errors are raised before any SQL exists.
"""

import enum
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from jobly.core.errors import (
    InvalidFilterError,
    InvalidFilterValueError,
    InvalidRangeError,
)
from jobly.core.sql import placeholder

_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})


class EntityKind(str, enum.Enum):
    """Collections that support filtered listing"""
    COMPANY = "company"
    JOB = "job"


class FilterOp(str, enum.Enum):
    """
    How a filter constrains its column.

    - CONTAINS: case-insensitive substring match
    - MIN / MAX: inclusive numeric bound
    - NONZERO: boolean; true keeps rows whose column is not 0, false is a no-op
    """
    CONTAINS = "contains"
    MIN = "min"
    MAX = "max"
    NONZERO = "nonzero"


@dataclass(frozen=True)
class Predicate:
    """SQL fragment with one "{}" per bind value, in order"""
    template: str
    values: Tuple[Any, ...] = ()


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_text(key: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    raise InvalidFilterValueError(key, value, "a string")


def _to_number(key: str, value: Any) -> Union[int, float, Decimal]:
    if isinstance(value, bool):
        raise InvalidFilterValueError(key, value, "a number")

    if isinstance(value, (int, float, Decimal)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise InvalidFilterValueError(key, value, "a number")
        if number.is_integer():
            number = int(number)
    else:
        raise InvalidFilterValueError(key, value, "a number")

    if not math.isfinite(number):
        raise InvalidFilterValueError(key, value, "a finite number")
    return number


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise InvalidFilterValueError(key, value, "true or false")


@dataclass(frozen=True)
class FilterField:
    name: str
    column: str
    op: FilterOp

    def coerce(self, value: Any) -> Any:
        if self.op is FilterOp.CONTAINS:
            return _to_text(self.name, value)
        if self.op is FilterOp.NONZERO:
            return _to_bool(self.name, value)
        return _to_number(self.name, value)

    def predicate(self, value: Any) -> Optional[Predicate]:
        """Fragment for an already-coerced value, or None if it adds no constraint"""
        if self.op is FilterOp.CONTAINS:
            return Predicate(
                f"LOWER({self.column}) LIKE LOWER({{}}) ESCAPE '\\'",
                (f"%{escape_like(value)}%",),
            )
        if self.op is FilterOp.MIN:
            return Predicate(f"{self.column} >= {{}}", (value,))
        if self.op is FilterOp.MAX:
            return Predicate(f"{self.column} <= {{}}", (value,))
        if value:
            return Predicate(f"{self.column} <> 0")
        return None


@dataclass(frozen=True)
class Collection:
    """Listing query for one entity kind and the filters it accepts"""
    table: str
    columns: Tuple[str, ...]
    order_by: str
    filters: Tuple[FilterField, ...]
    ranges: Tuple[Tuple[str, str], ...] = ()

    @property
    def filter_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.filters)

    def field(self, name: str) -> FilterField:
        for f in self.filters:
            if f.name == name:
                return f
        raise InvalidFilterError(name, self.filter_names)


COLLECTIONS: Dict[EntityKind, Collection] = {
    EntityKind.COMPANY: Collection(
        table="companies",
        columns=("handle", "name", "description", "num_employees", "logo_url"),
        order_by="name",
        filters=(
            FilterField("companyName", "name", FilterOp.CONTAINS),
            FilterField("minEmployees", "num_employees", FilterOp.MIN),
            FilterField("maxEmployees", "num_employees", FilterOp.MAX),
        ),
        ranges=(("minEmployees", "maxEmployees"),),
    ),
    EntityKind.JOB: Collection(
        table="jobs",
        columns=("title", "salary", "equity", "company_handle"),
        order_by="title",
        filters=(
            FilterField("title", "title", FilterOp.CONTAINS),
            FilterField("minSalary", "salary", FilterOp.MIN),
            FilterField("hasEquity", "equity", FilterOp.NONZERO),
        ),
    ),
}


@dataclass(frozen=True)
class FilterQuery:
    sql: str
    predicates: Tuple[str, ...]
    values: Tuple[Any, ...]

    @property
    def params(self) -> Dict[str, Any]:
        return {placeholder(i): v for i, v in enumerate(self.values, start=1)}


def build_filter_query(
    kind: Union[EntityKind, str],
    filters: Optional[Mapping[str, Any]] = None,
) -> FilterQuery:
    """
    Build the listing query for `kind` restricted by `filters`.

    Args:
        kind: EntityKind or its value ("company", "job")
        filters: Filter name -> raw value. None values count as absent.

    Returns:
        FilterQuery whose WHERE clause is the AND of one predicate per
        supplied filter, ordered by the entity's display field

    Raises:
        InvalidFilterError: Unknown filter key (first one in input order)
        InvalidFilterValueError: Value cannot be coerced
        InvalidRangeError: A min bound exceeds its max bound
    """
    collection = COLLECTIONS[EntityKind(kind)]
    filters = filters or {}

    fields = {key: collection.field(key) for key in filters}
    coerced = {
        key: fields[key].coerce(value)
        for key, value in filters.items()
        if value is not None
    }

    for low_key, high_key in collection.ranges:
        if low_key in coerced and high_key in coerced and coerced[low_key] > coerced[high_key]:
            raise InvalidRangeError(low_key, coerced[low_key], high_key, coerced[high_key])

    # Declaration order, so equal filter sets always render identically
    fragments = []
    for f in collection.filters:
        if f.name in coerced:
            predicate = f.predicate(coerced[f.name])
            if predicate is not None:
                fragments.append(predicate)

    predicates = []
    values = []
    for fragment in fragments:
        marks = []
        for value in fragment.values:
            values.append(value)
            marks.append(f":{placeholder(len(values))}")
        predicates.append(fragment.template.format(*marks))

    sql = f"SELECT {', '.join(collection.columns)} FROM {collection.table}"
    if predicates:
        sql += " WHERE " + " AND ".join(predicates)
    sql += f" ORDER BY {collection.order_by}"

    return FilterQuery(sql=sql, predicates=tuple(predicates), values=tuple(values))
