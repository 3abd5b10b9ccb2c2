"""Cell entity - the typed, nullable scalar stored at one row position.

A Cell is a tagged variant over {int, float, str, absent}. The DataType tag
is carried explicitly rather than inferred from the Python value, and the
pair always satisfies ``type is DataType.NULL`` iff ``value is None``.

Text form:
    NULL            -> NULL (for every declared type)
    INTEGER         -> 42, -7         (a leading '+' is accepted on input)
    FLOAT           -> 2.5, 1e+16     (Python's shortest round-trip repr)
    STRING          -> "He said, \\"hi\\""

The text form doubles as the match key for select/update/delete/count, so
formatting must stay deterministic.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Union

from tabstore.domain.errors import FormatError
from tabstore.domain.value_objects import DataType

CellValue = Union[int, float, str, None]

NULL_LITERAL = "NULL"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_PYTHON_KIND = {
    DataType.INTEGER: int,
    DataType.FLOAT: float,
    DataType.STRING: str,
}


@dataclass(frozen=True, slots=True, eq=False)
class Cell:
    """A typed, possibly-null scalar.

    Equality is value-based: two cells are equal iff both are null, or both
    hold equal values of the same kind. The type tag is not compared, so a
    null cell equals any other null cell whatever column it came from.

    Example:
        >>> Cell.parse('"Alice"', DataType.STRING).value
        'Alice'
        >>> Cell.parse("NULL", DataType.INTEGER).is_null
        True
    """

    value: CellValue
    type: DataType

    def __post_init__(self) -> None:
        if self.type is DataType.NULL or self.value is None:
            if self.type is not DataType.NULL or self.value is not None:
                raise ValueError(
                    f"Cell type {self.type} does not match value {self.value!r}"
                )
            return

        # Integers are accepted for FLOAT cells and widened
        if self.type is DataType.FLOAT and _is_int(self.value):
            object.__setattr__(self, "value", float(self.value))

        kind = _PYTHON_KIND[self.type]
        if isinstance(self.value, bool) or not isinstance(self.value, kind):
            raise ValueError(
                f"Cell type {self.type} does not match value {self.value!r}"
            )

    @classmethod
    def null(cls) -> Cell:
        """Create a null cell."""
        return cls(None, DataType.NULL)

    @property
    def is_null(self) -> bool:
        return self.value is None

    @classmethod
    def parse(cls, text: str, declared_type: DataType) -> Cell:
        """Parse literal text as a cell of the declared type.

        Args:
            text: The literal, e.g. ``42``, ``+2.5``, ``"abc"`` or ``NULL``.
            declared_type: The type of the column the cell belongs to.

        Returns:
            The parsed cell; a null cell for the literal ``NULL``.

        Raises:
            FormatError: If the text is not a valid literal of the type.
        """
        if text == NULL_LITERAL:
            return cls.null()

        if declared_type is DataType.INTEGER:
            digits = text[1:] if text.startswith("+") else text
            if not _INTEGER_RE.fullmatch(digits):
                raise FormatError(f"Invalid integer format: {text}")
            return cls(int(digits), DataType.INTEGER)

        if declared_type is DataType.FLOAT:
            digits = text[1:] if text.startswith("+") else text
            if not _FLOAT_RE.fullmatch(digits):
                raise FormatError(f"Invalid float format: {text}")
            number = float(digits)
            if not math.isfinite(number):
                raise FormatError(f"Float out of range: {text}")
            return cls(number, DataType.FLOAT)

        if declared_type is DataType.STRING:
            if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
                return cls(unescape(text[1:-1]), DataType.STRING)
            raise FormatError(f"Invalid string format: {text}")

        raise FormatError(f"Unsupported type for literal {text!r}: {declared_type}")

    def format(self) -> str:
        """Return the canonical text form of this cell (inverse of parse)."""
        if self.value is None:
            return NULL_LITERAL
        if self.type is DataType.STRING:
            return '"' + escape(self.value) + '"'
        if self.type is DataType.FLOAT:
            return repr(self.value)
        return str(self.value)

    def copy(self) -> Cell:
        return Cell(self.value, self.type)

    def __str__(self) -> str:
        return self.format()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        if self.value is None or other.value is None:
            return self.value is None and other.value is None
        return type(self.value) is type(other.value) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self.value), self.value))


def escape(text: str) -> str:
    """Escape backslashes and double quotes for a quoted STRING literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def unescape(body: str) -> str:
    """Undo ``escape`` on the body of a quoted STRING literal.

    Only ``\\"`` and ``\\\\`` are escapes. Any other backslash sequence,
    and a trailing lone backslash, is kept literally.
    """
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            if nxt in ('"', "\\"):
                out.append(nxt)
            else:
                out.append(ch + nxt)
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
