"""
Result and value objects passed between components.

Provides the success/failure wrapper used at the library boundary plus the
session and submission records produced by the API client.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar('T')


@dataclass
class Result(Generic[T]):
    """Outcome of an operation carrying either a value or the failure."""

    success: bool
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def success_result(cls, value: T) -> 'Result[T]':
        """Create a success result."""
        return cls(success=True, value=value)

    @classmethod
    def failure_result(cls, error: BaseException) -> 'Result[T]':
        """Create a failure result."""
        return cls(success=False, error=error)

    def is_success(self) -> bool:
        return self.success

    def is_failure(self) -> bool:
        return not self.success

    def get_value(self) -> T:
        """Get the value, raising error if failure."""
        if not self.success:
            raise ValueError(f"Result is a failure: {self.error}")
        return self.value

    def get_error(self) -> Optional[BaseException]:
        return self.error


@dataclass(frozen=True)
class Session:
    """Bearer token obtained from a successful authentication."""

    token: Optional[str]
    expires_at: Optional[datetime]
    user_name: Optional[str] = None

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """
        Check that a token exists and has not expired.

        Args:
            now: Reference time (defaults to the current UTC time)

        Returns:
            True only if the token is present and now is strictly before expiry
        """
        if not self.token or self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now < self.expires_at


@dataclass(frozen=True)
class SubmissionResult:
    """Fields extracted from a successful submission response."""

    message: Optional[str] = None
    invoice_id: Optional[Any] = None
    qr_url: Optional[str] = None
    huella: Optional[str] = None
    estado_aeat: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Response summary embedded in success artifacts."""
        return {
            'invoiceId': self.invoice_id,
            'message': self.message,
            'qrUrl': self.qr_url,
            'huella': self.huella,
            'estadoAeat': self.estado_aeat,
        }


@dataclass(frozen=True)
class ResultFiles:
    """Paths written for a successful submission."""

    result_file: str
    qr_file: Optional[str] = None
