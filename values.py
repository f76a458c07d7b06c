"""
Value model shared by states and goals.

A value is one of: str, int, float, bool, None, a list of values, or a dict
mapping str keys to values. Tuples are accepted on input and stored as lists.
Equality is structural and tag-aware, so True != 1 and 1 != 1.0.
"""

from errors import InvalidValueError

STRING = "string"
INT = "int"
FLOAT = "float"
BOOL = "bool"
NULL = "null"
LIST = "list"
MAP = "map"


def value_kind(value):
    """Return the tag of a value, or raise InvalidValueError for anything else."""
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return BOOL
    if value is None:
        return NULL
    if isinstance(value, str):
        return STRING
    if isinstance(value, int):
        return INT
    if isinstance(value, float):
        return FLOAT
    if isinstance(value, (list, tuple)):
        return LIST
    if isinstance(value, dict):
        return MAP
    raise InvalidValueError(f"Unsupported value type {type(value).__name__}: {value!r}")


def check_value(value):
    """
    Validate a value recursively and return its normalised form.

    Args:
        value: Candidate state or goal value.

    Returns:
        The same value with tuples turned into lists and containers copied.

    Raises:
        InvalidValueError: if the value (or anything inside it) is not a supported type.
    """
    kind = value_kind(value)
    if kind == LIST:
        return [check_value(v) for v in value]
    if kind == MAP:
        normalised = {}
        for key, v in value.items():
            if not isinstance(key, str):
                raise InvalidValueError(f"Map keys must be strings, got {key!r}")
            normalised[key] = check_value(v)
        return normalised
    return value


def values_equal(a, b):
    kind = value_kind(a)
    if kind != value_kind(b):
        return False
    if kind == LIST:
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    if kind == MAP:
        if a.keys() != b.keys():
            return False
        return all(values_equal(a[k], b[k]) for k in a)
    return a == b


def copy_value(value):
    if isinstance(value, (list, tuple)):
        return [copy_value(v) for v in value]
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    return value


def format_value(value):
    kind = value_kind(value)
    if kind == NULL:
        return "null"
    if kind == BOOL:
        return "true" if value else "false"
    if kind == LIST:
        return "[" + ", ".join(format_value(v) for v in value) + "]"
    if kind == MAP:
        return "{" + ", ".join(f"{k}: {format_value(v)}" for k, v in value.items()) + "}"
    return str(value)
