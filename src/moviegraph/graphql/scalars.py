"""
Custom GraphQL scalars
"""

import math
import re
from datetime import UTC, date, datetime, time, timedelta
from typing import Any, NewType

import strawberry
from graphql import IntValueNode, ValueNode

from ..logging import get_logger

logger = get_logger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MILLISECOND = timedelta(milliseconds=1)

# Accepted in addition to ISO-8601
DATE_FORMATS = ("%m-%d-%Y", "%m/%d/%Y", "%Y-%m-%d")

_MILLIS_PATTERN = re.compile(r"^-?\d+$")


class DateCoercionError(ValueError):
    """A value could not be coerced to or from the Date scalar."""

    pass


def to_utc(value: datetime | date) -> datetime:
    """Normalize a date or datetime to an aware UTC datetime. Naive values are taken as UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
    return datetime.combine(value, time(), tzinfo=UTC)


def from_epoch_millis(millis: int) -> datetime:
    try:
        return EPOCH + timedelta(milliseconds=millis)
    except OverflowError as e:
        raise DateCoercionError(f"Date out of range: {millis}") from e


def to_epoch_millis(value: datetime | date) -> int:
    return (to_utc(value) - EPOCH) // _MILLISECOND


def coerce_date(value: Any) -> datetime:
    """Coerce a wire value to the internal date representation.

    Raises:
        DateCoercionError: If the value is not acceptable as a date
    """
    if isinstance(value, bool):
        raise DateCoercionError(f"Date cannot represent a boolean: {value!r}")

    if isinstance(value, datetime | date):
        return to_utc(value)

    if isinstance(value, int):
        return from_epoch_millis(value)

    if isinstance(value, float):
        if not math.isfinite(value):
            raise DateCoercionError(f"Date cannot represent non-finite value: {value!r}")
        return from_epoch_millis(int(value))

    if isinstance(value, str):
        text = value.strip()
        if _MILLIS_PATTERN.match(text):
            return from_epoch_millis(int(text))
        try:
            return to_utc(datetime.fromisoformat(text))
        except ValueError:
            pass
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).replace(tzinfo=UTC)
            except ValueError:
                continue
        raise DateCoercionError(f"Date cannot parse string: {value!r}")

    raise DateCoercionError(f"Date cannot represent value: {value!r}")


def serialize_date(value: Any) -> int:
    """Serialize a date to integer milliseconds since the Unix epoch."""
    if isinstance(value, bool) or not isinstance(value, datetime | date):
        raise DateCoercionError(f"Date cannot serialize value: {value!r}")
    return to_epoch_millis(value)


def parse_date_value(value: Any) -> datetime | None:
    """Parse a variable value. Unparseable input becomes None."""
    try:
        return coerce_date(value)
    except DateCoercionError as e:
        logger.warning("Ignoring invalid Date value", value=repr(value), error=str(e))
        return None


def parse_date_literal(
    value_node: ValueNode, variables: dict[str, Any] | None = None
) -> datetime | None:
    """Parse an inline literal. Only integer literals are accepted; anything else is None."""
    _ = variables
    if not isinstance(value_node, IntValueNode):
        return None
    return parse_date_value(int(value_node.value))


Date = NewType("Date", datetime)

# Bound to ``Date`` through the schema config's scalar_map
DATE_SCALAR = strawberry.scalar(
    name="Date",
    description="Date and time, serialized as milliseconds since the Unix epoch",
    serialize=serialize_date,
    parse_value=parse_date_value,
    parse_literal=parse_date_literal,
)
