"""Explicit "field absent" marker for sparse updates."""

from typing import Final


class Unset:
    """Type of :data:`UNSET`; a patch field holding it is left untouched."""

    _instance: "Unset | None" = None

    def __new__(cls) -> "Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = Unset()


def is_set(value: object) -> bool:
    """True when a patch field carries a value (``None`` counts as a value)."""
    return not isinstance(value, Unset)
