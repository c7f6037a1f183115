"""The MISSING sentinel and the engine's notion of an empty value."""

import math
from typing import Any


class _Missing:
    """Marker for a field that is absent from the data being validated.

    Distinct from None: a record may hold an explicit None for a field, which
    `Nullable` accepts, whereas only an absent field satisfies `Optional`.
    """

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Missing":
        return self

    def __deepcopy__(self, memo: dict) -> "_Missing":
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def is_empty_value(value: Any) -> bool:
    """Return True for None, MISSING and the empty string.

    0, False, NaN and empty containers are present values, not empty ones.
    """
    if value is None or value is MISSING:
        return True
    return isinstance(value, str) and value == ""


def is_nan(value: Any) -> bool:
    """Return True if value is a float NaN."""
    return isinstance(value, float) and math.isnan(value)
