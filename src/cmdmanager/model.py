# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")

TERMINATOR = "#"
OPCODE_LENGTH = 10
MIN_MESSAGE_LENGTH = OPCODE_LENGTH + len(TERMINATOR)
MAX_PARAMETER_NAME_LENGTH = 15
HISTORY_CAPACITY = 5


class Opcode(Enum):
    """Closed set of Command Manager opcodes."""

    RUN_NO = "RUN_NO____"
    POLAR_NO = "POLAR_NO__"
    USR_MSG = "USR_MSG___"
    D_USR_FLD = "D_USR_FLD_"
    HISTORY = "HISTORY___"
    UNRECOGNIZED = ""

    @classmethod
    def from_text(cls, text: str) -> "Opcode":
        """
        Match an extracted opcode exactly (case-sensitive, full width).

        Args:
            text: The first OPCODE_LENGTH characters of a message.

        Returns:
            The matching member, or UNRECOGNIZED.
        """
        if len(text) != OPCODE_LENGTH:
            return cls.UNRECOGNIZED
        for member in cls:
            if member.value == text:
                return member
        return cls.UNRECOGNIZED

    @property
    def recorded(self) -> bool:
        """True for opcodes that enter the history once dispatched."""
        return self in _RECORDED


_RECORDED = frozenset({Opcode.RUN_NO, Opcode.POLAR_NO, Opcode.USR_MSG, Opcode.D_USR_FLD})


@dataclass(frozen=True)
class Frame:
    """A message that passed framing: opcode text plus terminator-stripped payload."""

    opcode_text: str
    payload: str

    @property
    def opcode(self) -> Opcode:
        return Opcode.from_text(self.opcode_text)


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Outcome of a fallible parse: either a value or a failure reason."""

    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ParseResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str) -> "ParseResult[T]":
        return cls(error=reason)


@dataclass(frozen=True)
class ParameterPair:
    name: str
    value: float


@dataclass
class DecodeOutcome:
    """What a single decode call did; returned for callers and tests."""

    frame: Optional[Frame] = None
    opcode: Opcode = Opcode.UNRECOGNIZED
    recorded: bool = False
    lines: List[str] = field(default_factory=list)

    @property
    def discarded(self) -> bool:
        """True when the message failed framing and was dropped."""
        return self.frame is None
