"""Error kinds raised by the text core.

Both are ValueError subclasses so callers that only know about ValueError
(argparse type hooks, the CLI boundary) keep working.
"""

from __future__ import annotations

from typing import Any, Optional


class UnitextError(ValueError):
    """Base class for all core failures."""


class InvalidEncoding(UnitextError):
    """Input bytes are not well-formed UTF-8."""

    def __init__(self, reason: str, offset: Optional[int] = None) -> None:
        self.reason = reason
        self.offset = offset
        if offset is None:
            message = f"Invalid UTF-8: {reason}"
        else:
            message = f"Invalid UTF-8 at byte {offset}: {reason}"
        super().__init__(message)


class InvalidForm(UnitextError):
    """Normalization form tag is not one of c, d, kc, kd."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"{value!r} is not a valid normalization form, "
            "options are: :d, :kd, :c, or :kc"
        )
