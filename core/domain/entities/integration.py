"""
Integration entities.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..clock import utc_now
from ..enums import IntegrationCategory


@dataclass(frozen=True)
class IntegrationConfig:
    """Static registry entry describing an external service."""
    id: str
    name: str
    category: IntegrationCategory
    required_keys: Tuple[str, ...]
    endpoints: Dict[str, str] = field(default_factory=dict)

    def missing_keys(self, credentials: Optional[Mapping[str, str]]) -> List[str]:
        """All required keys absent (or empty) in ``credentials``, in declared order."""
        credentials = credentials or {}
        return [key for key in self.required_keys if not credentials.get(key)]

    def first_missing_key(self, credentials: Optional[Mapping[str, str]]) -> Optional[str]:
        missing = self.missing_keys(credentials)
        return missing[0] if missing else None


@dataclass(frozen=True)
class IntegrationResult:
    """
    Uniform outcome of an integration dispatch.

    Either success with data or failure with an error, never both.
    """
    success: bool
    integration: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=utc_now)

    @classmethod
    def ok(cls, integration: str, data: Dict[str, Any]) -> "IntegrationResult":
        return cls(success=True, integration=integration, data=data)

    @classmethod
    def failure(cls, integration: str, error: str) -> "IntegrationResult":
        return cls(success=False, integration=integration, error=error)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": self.success,
            "timestamp": self.timestamp.isoformat(),
            "integration": self.integration,
        }
        if self.success:
            payload["data"] = self.data
        else:
            payload["error"] = self.error
        return payload
