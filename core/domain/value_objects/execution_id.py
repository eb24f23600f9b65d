"""Execution identifiers."""

import secrets
import string
import time
from dataclasses import dataclass

_ALPHABET = string.ascii_lowercase + string.digits


@dataclass(frozen=True)
class ExecutionID:
    """
    Opaque identifier of an agent or workflow run.

    Format: ``<prefix>_<epoch millis>_<9 random base36 chars>``.
    """

    value: str

    @classmethod
    def generate(cls, prefix: str = "exec") -> "ExecutionID":
        """Generate a new time+random derived id."""
        millis = int(time.time() * 1000)
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
        return cls(value=f"{prefix}_{millis}_{suffix}")

    def __str__(self) -> str:
        return self.value
