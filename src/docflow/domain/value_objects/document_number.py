"""Formatted document number minted from a sequence."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentNumber:
    """Prefix followed by the counter zero-padded to ``padding`` digits."""

    prefix: str
    padding: int
    value: int

    def __post_init__(self) -> None:
        if self.padding < 0:
            raise ValueError("padding must not be negative")
        if self.value < 1:
            raise ValueError("sequence value must be positive")

    def __str__(self) -> str:
        return f"{self.prefix}{self.value:0{self.padding}d}"
