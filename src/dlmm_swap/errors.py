"""Failure types raised by the swap client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class DlmmError(Exception):
    """Base class for every failure the client reports."""


@dataclass(eq=False)
class ValidationError(DlmmError, ValueError):
    """Caller-supplied swap parameters violate a precondition."""

    message: str
    rule: str = ""

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class CollaboratorError(DlmmError):
    """The swap service or pool-data service failed."""

    message: str
    http_status: Optional[int] = None
    cause: Optional[BaseException] = None

    def __str__(self) -> str:
        suffix = []
        if self.http_status is not None:
            suffix.append(f"status={self.http_status}")
        if self.cause:
            suffix.append(f"cause={self.cause}")
        detail = ", ".join(suffix)
        return f"{self.message} ({detail})" if detail else self.message
