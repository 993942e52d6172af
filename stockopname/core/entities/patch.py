"""
Tri-state field markers for partial updates.

A patch field is either UNSET (leave the stored value alone), None (clear it)
or a value (replace it).
"""

from typing import Any, Final


class Unset:
    """Type of the UNSET sentinel."""

    _instance: "Unset | None" = None

    def __new__(cls) -> "Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "Unset":
        return self

    def __deepcopy__(self, memo: dict) -> "Unset":
        return self


UNSET: Final = Unset()


def is_set(value: Any) -> bool:
    """True when a patch field was supplied (including an explicit None)."""
    return value is not UNSET


def provided_fields(patch: Any) -> dict[str, Any]:
    """Return the supplied fields of a patch dataclass, in declaration order."""
    return {
        name: getattr(patch, name)
        for name in patch.__dataclass_fields__
        if is_set(getattr(patch, name))
    }
