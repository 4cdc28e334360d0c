"""Error types raised by the simulation engine and its decoders."""

from __future__ import annotations

from typing import Iterable

from pydantic import ValidationError


def format_validation_errors(errors: Iterable[dict], limit: int = 3) -> str:
    """Render the first few pydantic errors as ``loc: msg`` snippets."""
    error_list = list(errors)
    snippets = []
    for err in error_list:
        loc = ".".join(str(entry) for entry in err.get("loc", [])) or "<root>"
        msg = err.get("msg") or err.get("type") or "validation error"
        snippets.append(f"{loc}: {msg}")
        if len(snippets) >= limit:
            break
    remaining = len(error_list) - len(snippets)
    if remaining > 0:
        snippets.append(f"... ({remaining} more)")
    return "; ".join(snippets)


class DecodeError(ValueError):
    """Raised when serialised data cannot be turned back into engine objects."""

    def __init__(self, message: str, *, cause: Exception | None = None):
        self.message = message
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if isinstance(self.cause, ValidationError):
            return f"{self.message}: {format_validation_errors(self.cause.errors())}"
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __str__(self) -> str:
        return self._build_message()


class SimulationError(RuntimeError):
    """Raised when the permutation search breaks one of its own bounds."""


__all__ = ["DecodeError", "SimulationError", "format_validation_errors"]
