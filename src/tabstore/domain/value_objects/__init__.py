"""Value objects for the table store.

Exports:
    - DataType: Enumeration of cell types
    - Column: Immutable (name, type) column descriptor
    - AggregateOp: Supported aggregate keywords
"""

from tabstore.domain.value_objects.aggregate_op import AggregateOp, reduce_values
from tabstore.domain.value_objects.data_type import Column, DataType

__all__ = [
    "AggregateOp",
    "Column",
    "DataType",
    "reduce_values",
]
