"""
Happy Thoughts API — Query Filter Builder
==========================================

What:  Turns optional list query parameters into SQLAlchemy WHERE predicates.
How:   Each resource declares which parameters it recognizes and how each one
       is compared (FilterKind). build() walks the declarations, skips absent
       parameters, coerces the rest, and returns the predicates; apply() AND-s
       them onto a SELECT.

Comparison rules:
    TEXT       lower(column) = lower(value)         exact, case-insensitive
    INTEGER    column = int(value)                  non-integers are rejected
    FLAG       column = (value.lower() == "true")   anything else means False
    DATE_FROM  column >= parsed date                inclusive lower bound

Example:
    builder = QueryFilterBuilder(Dog, [FieldFilter("breed", "breed", FilterKind.TEXT)])
    query = builder.apply(select(Dog), {"breed": "Labrador", "page": "2"})
    # SELECT ... WHERE lower(dogs.breed) = 'labrador'   ("page" is ignored)
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy import ColumnElement, Select, func

from happythoughts.exceptions import ValidationError


class FilterKind(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    FLAG = "flag"
    DATE_FROM = "date_from"


@dataclass(frozen=True)
class FieldFilter:
    """A recognized query parameter and the model column it constrains."""

    param: str
    column: str
    kind: FilterKind


def coerce_flag(value: str) -> bool:
    """
    "true" in any letter case is True; every other string is False.

    Typos such as "ture" or "yes" therefore filter for False. Existing clients
    rely on this, so it is not rejected.
    """
    return value.strip().lower() == "true"


def parse_date(value: str, param: str = "date") -> datetime:
    """
    Parse an ISO 8601 date or datetime as a UTC instant.

    Naive values are taken as UTC; values with an offset are converted to
    UTC, matching how created_at is stored.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(
            message=f"Invalid {param} '{value}'. Use ISO 8601, e.g. 2024-01-15",
            field=param,
        )
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_int(value: str, param: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ValidationError(message=f"Invalid {param} '{value}'. Expected an integer", field=param)


class QueryFilterBuilder:
    """
    Builds a conjunctive filter for one model from a mapping of query values.

    Unrecognized keys are ignored and None / empty-string values count as
    absent, so callers can pass request.query_params or a dict of optional
    route arguments unchanged.
    """

    def __init__(self, model: Any, fields: Sequence[FieldFilter]):
        self.model = model
        self.fields = tuple(fields)
        for field in self.fields:
            if not hasattr(model, field.column):
                raise ValueError(f"{model.__name__} has no column '{field.column}'")

    @property
    def params(self) -> List[str]:
        return [field.param for field in self.fields]

    def build(self, params: Mapping[str, Optional[str]]) -> List[ColumnElement[bool]]:
        conditions: List[ColumnElement[bool]] = []
        for field in self.fields:
            raw = params.get(field.param)
            if raw is None or raw == "":
                continue
            raw = str(raw)
            column = getattr(self.model, field.column)

            if field.kind is FilterKind.TEXT:
                conditions.append(func.lower(column) == raw.strip().lower())
            elif field.kind is FilterKind.INTEGER:
                conditions.append(column == _parse_int(raw, field.param))
            elif field.kind is FilterKind.FLAG:
                conditions.append(column.is_(coerce_flag(raw)))
            elif field.kind is FilterKind.DATE_FROM:
                conditions.append(column >= parse_date(raw, field.param))
        return conditions

    def apply(self, query: Select, params: Mapping[str, Optional[str]]) -> Select:
        conditions = self.build(params)
        if conditions:
            query = query.where(*conditions)
        return query
