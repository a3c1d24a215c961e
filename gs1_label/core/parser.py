"""
GS1 Element String Parser

Single-pass parser for the element strings printed on marking labels:

    01 <GTIN:14 digits> 21 <serial:1..20> [GS] 9x <value> [GS] 9x <value> ...

Key rules:
- AI (01) is fixed-length (14 digits) and never needs a separator
- AI (21) is variable-length; it ends at GS or at the start of a tail AI
  ("91", "92", "93"), so the separator after it may be omitted
- AI (91) and (93) are fixed-length (4 characters)
- AI (92) is variable-length (44 or 88 characters); it ends at GS or at the
  start of the next tail AI

Tail AI detection takes precedence over treating the same two characters
as serial or AI (92) content. The parser fails fast on the first violation
and never returns a partial record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .normalizer import NormalizeOptions, normalize
from ..validators.validators import (
    AI_RULES,
    GS,
    SERIAL_MAX_LENGTH,
    is_digits,
    is_tail_ai,
    validate_ai92,
)


class ErrorCode(str, Enum):
    """Parse failure codes."""
    BAD_GTIN = "BAD_GTIN"
    MISSING_SERIAL = "MISSING_SERIAL"
    SERIAL_EMPTY = "SERIAL_EMPTY"
    SERIAL_TOO_LONG = "SERIAL_TOO_LONG"
    UNKNOWN_AI = "UNKNOWN_AI"
    AI91_LENGTH_INVALID = "AI91_LENGTH_INVALID"
    AI93_LENGTH_INVALID = "AI93_LENGTH_INVALID"
    AI92_INVALID = "AI92_INVALID"


class GS1ParseError(ValueError):
    """
    Base class for element string grammar violations.

    Attributes:
        code: ErrorCode identifying the violation
        message: Operator-facing description
        at_index: Cursor position in the normalized string (if known)
        ai: Application Identifier being read (if any)
    """
    code: ErrorCode = ErrorCode.BAD_GTIN

    def __init__(
        self,
        message: str,
        *,
        at_index: Optional[int] = None,
        ai: Optional[str] = None,
    ):
        super().__init__(f"{self.code.value}: {message}")
        self.message = message
        self.at_index = at_index
        self.ai = ai

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "at_index": self.at_index,
            "ai": self.ai,
        }


class BadGtinError(GS1ParseError):
    code = ErrorCode.BAD_GTIN


class MissingSerialError(GS1ParseError):
    code = ErrorCode.MISSING_SERIAL


class SerialEmptyError(GS1ParseError):
    code = ErrorCode.SERIAL_EMPTY


class SerialTooLongError(GS1ParseError):
    code = ErrorCode.SERIAL_TOO_LONG


class UnknownAiError(GS1ParseError):
    code = ErrorCode.UNKNOWN_AI


class Ai91LengthError(GS1ParseError):
    code = ErrorCode.AI91_LENGTH_INVALID


class Ai93LengthError(GS1ParseError):
    code = ErrorCode.AI93_LENGTH_INVALID


class Ai92InvalidError(GS1ParseError):
    code = ErrorCode.AI92_INVALID


_FIXED_TAIL_ERRORS = {
    "91": Ai91LengthError,
    "93": Ai93LengthError,
}


@dataclass(frozen=True)
class TailElement:
    """
    One trailing element after the serial.

    Attributes:
        ai: "91", "92" or "93"
        value: Element value
        had_leading_separator: True if a GS preceded this element in the
            normalized input. Kept for display only; serialization always
            writes a GS before every tail.
    """
    ai: str
    value: str
    had_leading_separator: bool = False


@dataclass(frozen=True)
class ElementStringRecord:
    """
    Parsed element string.

    Attributes:
        gtin: 14-digit GTIN, AI (01)
        serial: Serial number, AI (21), 1..20 characters
        tails: AI (91)/(92)/(93) elements in input order
    """
    gtin: str
    serial: str
    tails: Tuple[TailElement, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "gtin": self.gtin,
            "serial": self.serial,
            "tails": [
                {
                    "ai": t.ai,
                    "value": t.value,
                    "had_leading_separator": t.had_leading_separator,
                }
                for t in self.tails
            ],
        }


class _State(Enum):
    EXPECT_GTIN_AI = "ExpectGtinAi"
    READ_GTIN = "ReadGtin"
    EXPECT_SERIAL_AI = "ExpectSerialAi"
    READ_SERIAL = "ReadSerial"
    READ_TAIL_AI = "ReadTailAi"
    READ_TAIL_VALUE = "ReadTailValue"
    DONE = "Done"


class GS1Parser:
    """
    Cursor-based state machine over a normalized element string.

    One instance parses one string; use parse() for the usual call.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.gtin = ""
        self.serial = ""
        self.tails: List[TailElement] = []
        # Tail being read: (ai, had_leading_separator)
        self._tail: Optional[Tuple[str, bool]] = None

    def _expect_ai(self, ai: str) -> bool:
        if self.text[self.pos:self.pos + 2] != ai:
            return False
        self.pos += 2
        return True

    def _read_until_boundary(self) -> str:
        """Read until GS, a tail AI, or end of input."""
        start = self.pos
        while self.pos < len(self.text):
            if self.text[self.pos] == GS or is_tail_ai(self.text, self.pos):
                break
            self.pos += 1
        return self.text[start:self.pos]

    def _expect_gtin_ai(self) -> _State:
        if not self._expect_ai("01"):
            raise BadGtinError("string does not start with (01)", at_index=self.pos, ai="01")
        return _State.READ_GTIN

    def _read_gtin(self) -> _State:
        length = AI_RULES["01"].fixed_length
        gtin = self.text[self.pos:self.pos + length]
        if not is_digits(gtin, length):
            raise BadGtinError(f"(01) must be {length} digits", at_index=self.pos, ai="01")
        self.gtin = gtin
        self.pos += length
        return _State.EXPECT_SERIAL_AI

    def _expect_serial_ai(self) -> _State:
        if not self._expect_ai("21"):
            raise MissingSerialError("(21) is missing", at_index=self.pos, ai="21")
        return _State.READ_SERIAL

    def _read_serial(self) -> _State:
        start = self.pos
        serial = self._read_until_boundary()
        if len(serial) > SERIAL_MAX_LENGTH:
            raise SerialTooLongError(
                f"(21) exceeds {SERIAL_MAX_LENGTH} characters ({len(serial)})",
                at_index=start + SERIAL_MAX_LENGTH,
                ai="21",
            )
        if not serial:
            raise SerialEmptyError("(21) is empty", at_index=start, ai="21")
        self.serial = serial
        return _State.READ_TAIL_AI if self.pos < len(self.text) else _State.DONE

    def _read_tail_ai(self) -> _State:
        had_separator = False
        if self.text[self.pos] == GS:
            had_separator = True
            self.pos += 1

        ai = is_tail_ai(self.text, self.pos)
        if not ai:
            raise UnknownAiError(
                f"unknown AI at position {self.pos}: {self.text[self.pos:self.pos + 2]!r}",
                at_index=self.pos,
            )
        self.pos += 2
        self._tail = (ai, had_separator)
        return _State.READ_TAIL_VALUE

    def _read_tail_value(self) -> _State:
        ai, had_separator = self._tail
        rule = AI_RULES[ai]

        if rule.fixed_length:
            value = self.text[self.pos:self.pos + rule.fixed_length]
            if len(value) < rule.fixed_length:
                raise _FIXED_TAIL_ERRORS[ai](
                    f"({ai}) must be {rule.fixed_length} characters, got {len(value)}",
                    at_index=self.pos,
                    ai=ai,
                )
            self.pos += rule.fixed_length
        else:
            start = self.pos
            value = self._read_until_boundary()
            if not validate_ai92(value):
                raise Ai92InvalidError(
                    f"(92) must be 44 or 88 characters of [A-Za-z0-9+/=_.-], got {len(value)}",
                    at_index=start,
                    ai=ai,
                )

        self.tails.append(TailElement(ai=ai, value=value, had_leading_separator=had_separator))
        self._tail = None
        return _State.READ_TAIL_AI if self.pos < len(self.text) else _State.DONE

    def run(self) -> ElementStringRecord:
        handlers = {
            _State.EXPECT_GTIN_AI: self._expect_gtin_ai,
            _State.READ_GTIN: self._read_gtin,
            _State.EXPECT_SERIAL_AI: self._expect_serial_ai,
            _State.READ_SERIAL: self._read_serial,
            _State.READ_TAIL_AI: self._read_tail_ai,
            _State.READ_TAIL_VALUE: self._read_tail_value,
        }
        state = _State.EXPECT_GTIN_AI
        while state is not _State.DONE:
            state = handlers[state]()

        return ElementStringRecord(
            gtin=self.gtin,
            serial=self.serial,
            tails=tuple(self.tails),
        )


def parse(normalized: str) -> ElementStringRecord:
    """
    Parse a normalized element string.

    Args:
        normalized: Output of normalize()

    Returns:
        ElementStringRecord

    Raises:
        GS1ParseError: subclass identifying the first grammar violation

    Examples:
        >>> record = parse("0100012345678905211234567")
        >>> record.gtin, record.serial
        ('00012345678905', '1234567')
    """
    return GS1Parser(normalized).run()


def parse_from_user_input(
    raw: str,
    options: Optional[NormalizeOptions] = None,
) -> ElementStringRecord:
    """
    Normalize and parse operator input.

    Main entry point for callers.
    """
    return parse(normalize(raw, options))
