"""Tailoring policy selector."""

from enum import Enum


class TailoringMode(str, Enum):
    """Strict forbids introducing anything absent from the source resume;
    flexible allows bounded, plausible embellishment."""

    STRICT = "strict"
    FLEXIBLE = "flexible"

    @classmethod
    def from_flag(cls, generate_freely: bool) -> "TailoringMode":
        return cls.FLEXIBLE if generate_freely else cls.STRICT

    @property
    def is_flexible(self) -> bool:
        return self is TailoringMode.FLEXIBLE
