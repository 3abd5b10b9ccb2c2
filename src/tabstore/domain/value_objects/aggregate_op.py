"""Numeric aggregate operators.

All arithmetic happens in floating point, so INTEGER columns are widened
to float before they are combined. Integers beyond 2**53 lose precision;
this matches the store's file-compatible behaviour and is intentional.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Iterable

from tabstore.domain.errors import UnsupportedOperationError


class AggregateOp(Enum):
    """Supported aggregate keywords."""

    SUM = "sum"
    PRODUCT = "product"
    MAXIMUM = "maximum"
    MINIMUM = "minimum"

    @classmethod
    def from_keyword(cls, keyword: str | AggregateOp) -> AggregateOp:
        """Resolve a case-insensitive keyword.

        Raises:
            UnsupportedOperationError: If the keyword is not supported.
        """
        if isinstance(keyword, AggregateOp):
            return keyword
        try:
            return cls(keyword.lower())
        except ValueError as e:
            raise UnsupportedOperationError(
                f"Unsupported aggregate operation: {keyword}"
            ) from e


def _maximum(values: list[float]) -> float | None:
    return max(values) if values else None


def _minimum(values: list[float]) -> float | None:
    return min(values) if values else None


_REDUCERS: dict[AggregateOp, Callable[[list[float]], float | None]] = {
    AggregateOp.SUM: lambda values: sum(values, 0.0),
    AggregateOp.PRODUCT: lambda values: math.prod(values, start=1.0),
    AggregateOp.MAXIMUM: _maximum,
    AggregateOp.MINIMUM: _minimum,
}


def reduce_values(op: AggregateOp, values: Iterable[int | float]) -> float | None:
    """Combine non-null numeric values with an aggregate operator.

    Args:
        op: The operator to apply.
        values: Numeric values; nulls must already be filtered out.

    Returns:
        The aggregate as a float. ``sum`` and ``product`` of no values are
        0.0 and 1.0; ``maximum`` and ``minimum`` of no values are None.
    """
    return _REDUCERS[op]([float(v) for v in values])
