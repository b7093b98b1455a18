"""
Value Generation Strategy.

Arbitrary values per column type, and bounded values strictly above or
below a reference value or an observed distribution of values.
"""
import bisect
import logging
import math
import random
import string
from typing import Iterable, List, Optional, Union

from pysimgen.core.choice import frequency, pick
from pysimgen.core.errors import DomainExhausted
from pysimgen.core.schema import Value
from pysimgen.core.types import (
    ColumnType, FLOAT_MAX, INTEGER_MAX, INTEGER_MIN, column_type_from_sql,
)

logger = logging.getLogger(__name__)

__all__ = ["ValueGenerator", "TEXT_ALPHABET"]

TEXT_ALPHABET = "".join(sorted(string.ascii_letters + string.digits))
_BLOB_ALPHABET = list(range(256))


class ValueGenerator:
    """Generates random values and strictly bounded values for column types."""

    def __init__(self, rng: random.Random):
        self.rng = rng

    # ------------------------------------------------------------------
    # Arbitrary values
    # ------------------------------------------------------------------

    def _generate_integer(self) -> int:
        if self.rng.random() < 0.8:
            return self.rng.randint(-1000, 1000)
        return self.rng.randint(INTEGER_MIN, INTEGER_MAX)

    def _generate_float(self) -> float:
        return self.rng.uniform(-1e10, 1e10)

    def _generate_text(self, min_len: int = 1, max_len: int = 16) -> str:
        length = self.rng.randint(min_len, max_len)
        return "".join(self.rng.choice(TEXT_ALPHABET) for _ in range(length))

    def _generate_blob(self, min_len: int = 1, max_len: int = 16) -> bytes:
        length = self.rng.randint(min_len, max_len)
        return bytes(self.rng.randint(0, 255) for _ in range(length))

    def generate(self, column_type: Union[ColumnType, str]) -> Value:
        """Generate a non-NULL value for the given column type."""
        if not isinstance(column_type, ColumnType):
            column_type = column_type_from_sql(column_type)

        if column_type is ColumnType.INTEGER:
            return Value.integer(self._generate_integer())
        if column_type is ColumnType.FLOAT:
            return Value.float_(self._generate_float())
        if column_type is ColumnType.TEXT:
            return Value.text(self._generate_text())
        return Value.blob(self._generate_blob())

    def generate_from(self, values: Iterable[Value], column_type: ColumnType) -> Value:
        """Pick one of the observed non-NULL values.

        An empty distribution yields a fresh value of the column type.
        """
        candidates = _non_null(values)
        if not candidates:
            logger.debug("Empty %s distribution, generating a fresh value", column_type)
            return self.generate(column_type)
        return pick(candidates, self.rng)

    # ------------------------------------------------------------------
    # Bounded values
    # ------------------------------------------------------------------

    @staticmethod
    def has_greater(value: Value) -> bool:
        """Whether some value of the same type is strictly greater."""
        if value.is_null:
            return False
        if value.type is ColumnType.INTEGER:
            return value.data < INTEGER_MAX
        if value.type is ColumnType.FLOAT:
            return value.data < FLOAT_MAX
        return True

    @staticmethod
    def has_lesser(value: Value) -> bool:
        """Whether some value of the same type is strictly lesser."""
        if value.is_null:
            return False
        if value.type is ColumnType.INTEGER:
            return value.data > INTEGER_MIN
        if value.type is ColumnType.FLOAT:
            return value.data > -FLOAT_MAX
        return len(value.data) > 0

    def greater_than(self, value: Value) -> Value:
        """A value of the same type strictly greater than ``value``."""
        if not self.has_greater(value):
            raise DomainExhausted(f"No {value.type or 'NULL'} value is greater than {value}", value)

        if value.type is ColumnType.INTEGER:
            v = value.data
            upper = INTEGER_MAX if self.rng.random() < 0.2 else min(INTEGER_MAX, v + 1000)
            return Value.integer(self.rng.randint(v + 1, upper))

        if value.type is ColumnType.FLOAT:
            v = value.data
            upper = min(FLOAT_MAX, v + max(1.0, abs(v)))
            candidate = self.rng.uniform(v, upper)
            if candidate <= v:
                candidate = math.nextafter(v, math.inf)
            return Value.float_(candidate)

        if value.type is ColumnType.TEXT:
            return Value.text("".join(self._raise_sequence(list(value.data), TEXT_ALPHABET)))
        return Value.blob(bytes(self._raise_sequence(list(value.data), _BLOB_ALPHABET)))

    def less_than(self, value: Value) -> Value:
        """A value of the same type strictly less than ``value``."""
        if not self.has_lesser(value):
            raise DomainExhausted(f"No {value.type or 'NULL'} value is less than {value}", value)

        if value.type is ColumnType.INTEGER:
            v = value.data
            lower = INTEGER_MIN if self.rng.random() < 0.2 else max(INTEGER_MIN, v - 1000)
            return Value.integer(self.rng.randint(lower, v - 1))

        if value.type is ColumnType.FLOAT:
            v = value.data
            lower = max(-FLOAT_MAX, v - max(1.0, abs(v)))
            candidate = self.rng.uniform(lower, v)
            if candidate >= v:
                candidate = math.nextafter(v, -math.inf)
            return Value.float_(candidate)

        if value.type is ColumnType.TEXT:
            return Value.text("".join(self._lower_sequence(list(value.data), TEXT_ALPHABET)))
        return Value.blob(bytes(self._lower_sequence(list(value.data), _BLOB_ALPHABET)))

    def greater_than_all(self, values: Iterable[Value], column_type: ColumnType) -> Value:
        """A value strictly greater than the maximum of the distribution."""
        candidates = _non_null(values)
        if not candidates:
            logger.debug("Empty %s distribution, generating a fresh value", column_type)
            return self.generate(column_type)
        return self.greater_than(max(candidates))

    def less_than_all(self, values: Iterable[Value], column_type: ColumnType) -> Value:
        """A value strictly less than the minimum of the distribution."""
        candidates = _non_null(values)
        if not candidates:
            logger.debug("Empty %s distribution, generating a fresh value", column_type)
            return self.generate(column_type)
        return self.less_than(min(candidates))

    def different_from(self, value: Value) -> Value:
        """A value of the same type that is not equal to ``value``."""
        greater, lesser = self.has_greater(value), self.has_lesser(value)
        if not (greater or lesser):
            raise DomainExhausted(f"No value differs from {value}", value)
        direction = frequency([(int(greater), "greater"), (int(lesser), "lesser")], self.rng)
        if direction == "greater":
            return self.greater_than(value)
        return self.less_than(value)

    # ------------------------------------------------------------------
    # Text / blob helpers
    # ------------------------------------------------------------------

    def _suffix(self, alphabet, max_len: int = 4) -> list:
        return [self.rng.choice(alphabet) for _ in range(self.rng.randint(0, max_len))]

    def _raise_sequence(self, units: list, alphabet) -> list:
        # Either lengthen the sequence, or raise one position and rewrite what follows
        positions = [i for i, u in enumerate(units) if _above(alphabet, u)]
        if not positions or self.rng.random() < 0.5:
            return units + [self.rng.choice(alphabet)] + self._suffix(alphabet)
        i = pick(positions, self.rng)
        replacement = pick(_above(alphabet, units[i]), self.rng)
        return units[:i] + [replacement] + self._suffix(alphabet)

    def _lower_sequence(self, units: list, alphabet) -> list:
        # Either cut to a proper prefix, or lower one position and rewrite what follows
        positions = [i for i, u in enumerate(units) if _below(alphabet, u)]
        if not positions or self.rng.random() < 0.5:
            return units[:self.rng.randint(0, len(units) - 1)]
        i = pick(positions, self.rng)
        replacement = pick(_below(alphabet, units[i]), self.rng)
        return units[:i] + [replacement] + self._suffix(alphabet)


def _non_null(values: Optional[Iterable[Value]]) -> List[Value]:
    return [v for v in values or () if not v.is_null]


def _above(alphabet, unit):
    return alphabet[bisect.bisect_right(alphabet, unit):]


def _below(alphabet, unit):
    return alphabet[:bisect.bisect_left(alphabet, unit)]
