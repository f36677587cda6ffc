from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class ServiceError(Exception):
    """Simulation service failure carrying the API error contract fields."""

    status_code: int
    code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def validation(cls, message: str, **details: Any) -> "ServiceError":
        return cls(status_code=400, code="VALIDATION_ERROR", message=message, details=details)

    def to_detail(self) -> Dict[str, Any]:
        """Body placed under HTTPException.detail: {"error": {code, message, details}}."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }

    def __str__(self) -> str:  # pragma: no cover - convenience for logging
        return f"{self.status_code} {self.code}: {self.message} | {self.details}"
