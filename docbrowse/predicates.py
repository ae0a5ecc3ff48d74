"""
Single-field filter predicates.

A predicate is built from three pieces of operator input (field, operator,
raw value text). The raw text is coerced into a typed value according to the
operator:

- ordering operators (<, <=, >, >=) try a float, then an int, then keep the text
- membership operators (in, array-contains-any) split on commas and chunk the
  tokens, since the store caps the number of values per clause
- == and array-contains keep the text unchanged

Predicates evaluate in memory against a document's data mapping with typed
comparison: numbers compare with numbers, strings with strings, and values of
different kinds never match.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from docbrowse.utils import chunk

DEFAULT_CHUNK_SIZE = 10

_MISSING = object()


class Operator(Enum):
    """Comparison operators in the order the operator picker shows them."""
    EQ = "=="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    ARRAY_CONTAINS = "array-contains"
    IN = "in"
    ARRAY_CONTAINS_ANY = "array-contains-any"

    @property
    def is_ordering(self) -> bool:
        return self in (Operator.LT, Operator.LE, Operator.GT, Operator.GE)

    @property
    def is_membership(self) -> bool:
        return self in (Operator.IN, Operator.ARRAY_CONTAINS_ANY)

    @classmethod
    def symbols(cls) -> List[str]:
        return [op.value for op in cls]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _same_kind(a: Any, b: Any) -> bool:
    """Check whether two values belong to the same comparable kind."""
    if _is_number(a) and _is_number(b):
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool)
    if isinstance(a, str) and isinstance(b, str):
        return True
    if a is None and b is None:
        return True
    return isinstance(a, (list, dict)) and type(a) is type(b)


def _equal(a: Any, b: Any) -> bool:
    return _same_kind(a, b) and a == b


def _ordered(compare):
    def check(actual: Any, expected: Any) -> bool:
        if actual is None or not _same_kind(actual, expected):
            return False
        if not (_is_number(actual) or isinstance(actual, str)):
            return False
        return compare(actual, expected)
    return check


def _array_contains(actual: Any, expected: Any) -> bool:
    return isinstance(actual, list) and any(_equal(item, expected) for item in actual)


def _in(actual: Any, members: List[Any]) -> bool:
    return any(_equal(actual, member) for member in members)


def _array_contains_any(actual: Any, members: List[Any]) -> bool:
    return isinstance(actual, list) and any(_in(item, members) for item in actual)


_OP_MAP = {
    Operator.EQ: _equal,
    Operator.LT: _ordered(lambda a, b: a < b),
    Operator.LE: _ordered(lambda a, b: a <= b),
    Operator.GT: _ordered(lambda a, b: a > b),
    Operator.GE: _ordered(lambda a, b: a >= b),
    Operator.ARRAY_CONTAINS: _array_contains,
    Operator.IN: _in,
    Operator.ARRAY_CONTAINS_ANY: _array_contains_any,
}


def resolve_field(data: Dict[str, Any], field: str) -> Any:
    """
    Look up a field in document data, following dotted paths into maps.

    Returns a sentinel when any segment is missing so that absent fields
    can be told apart from explicit nulls.
    """
    if field in data:
        return data[field]

    current: Any = data
    for part in field.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def coerce_value(raw: str, operator: Operator, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Any:
    """
    Convert raw filter text into the value type the operator expects.

    Never raises on bad input: unparseable numbers fall back to the text.
    Numbers are parsed strictly, so text with surrounding whitespace or digit
    separators such as "1_000" stays a string.
    """
    if operator.is_ordering:
        if raw != raw.strip() or "_" in raw:
            return raw
        try:
            return float(raw)
        except ValueError:
            pass
        try:
            return int(raw)
        except ValueError:
            return raw
    if operator.is_membership:
        return chunk(raw.split(","), chunk_size)
    return raw


@dataclass
class Predicate:
    """One field/operator/value filter condition."""
    field: str
    operator: Operator
    value: Any
    raw_value: str = ""

    def clauses(self) -> List[Any]:
        """
        Values to evaluate as separate clauses.

        Membership predicates produce one clause per chunk; every other
        operator has a single clause.
        """
        if self.operator.is_membership:
            return list(self.value)
        return [self.value]

    def matches(self, data: Dict[str, Any]) -> bool:
        """Test document data against this predicate (union over clauses)."""
        actual = resolve_field(data, self.field)
        if actual is _MISSING:
            return False
        check = _OP_MAP[self.operator]
        return any(check(actual, clause) for clause in self.clauses())

    def __str__(self):
        return f"{self.field} {self.operator.value} {self.raw_value}"


def build_predicate(field: str, operator: Operator, raw: str,
                    chunk_size: int = DEFAULT_CHUNK_SIZE) -> Predicate:
    """Create a predicate from prompt input, coercing the raw value."""
    return Predicate(
        field=field,
        operator=operator,
        value=coerce_value(raw, operator, chunk_size),
        raw_value=raw,
    )
