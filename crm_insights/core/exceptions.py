"""
Service exceptions.

The analytics functions themselves never raise; these cover the layers
around them (range resolution, loading data from the store).
"""

from typing import Any


class CRMInsightsError(Exception):
    """Base exception for all service errors"""

    status_code = 500

    def __init__(self, message: str, code: str = "INTERNAL_ERROR", details: dict[str, Any] | None = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidDateRangeError(CRMInsightsError):
    """Unknown range key, or a custom range that ends before it starts"""

    status_code = 422

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code="INVALID_DATE_RANGE", details=details)


class SnapshotLoadError(CRMInsightsError):
    """Reading or seeding the store failed"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code="SNAPSHOT_LOAD_FAILED", details=details)
