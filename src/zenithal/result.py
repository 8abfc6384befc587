"""Parse results: success with a value, or failure with a diagnostic.

Parse failure is the common case during backtracking, so it is modelled
as a returned value instead of an exception. Success is truthy and Failure
is falsy, which keeps propagation to one line:

    result = self.parse_char(CONTENT_START)
    if not result:
        return result

A propagated Failure is returned as-is, so its message and location are
never rewritten on the way up.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from zenithal.location import SourceLocation


@dataclass(frozen=True, slots=True)
class Success:
    """Successful parse carrying the produced value."""

    value: Any

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """Failed parse carrying a message and the position it was detected at."""

    message: str
    location: SourceLocation

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"[line {self.location.lineno}, column {self.location.col_offset}] {self.message}"


Result = Success | Failure
