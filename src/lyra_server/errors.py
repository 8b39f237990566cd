# SPDX-License-Identifier: MIT
"""Lookup errors raised by the package index."""

from dataclasses import dataclass, field
from typing import Any


class ErrorCode:
    """Standard API error codes."""

    PACKAGE_NOT_FOUND = "PACKAGE_NOT_FOUND"
    VERSION_NOT_FOUND = "VERSION_NOT_FOUND"
    PACKAGE_FILE_MISSING = "PACKAGE_FILE_MISSING"
    ENDPOINT_NOT_FOUND = "ENDPOINT_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# HTTP status codes for each error
ERROR_STATUS_CODES = {
    ErrorCode.PACKAGE_NOT_FOUND: 404,
    ErrorCode.VERSION_NOT_FOUND: 404,
    ErrorCode.PACKAGE_FILE_MISSING: 404,
    ErrorCode.ENDPOINT_NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
}


@dataclass
class APIError(Exception):
    """Base exception carrying a structured error body.

    Attributes:
        code: Error code from ErrorCode class
        message: Human-readable error message
        fields: Extra fields included in the response body
    """

    code: str
    message: str
    fields: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message

    @property
    def status_code(self) -> int:
        """Get HTTP status code for this error."""
        return ERROR_STATUS_CODES.get(self.code, 500)

    def to_response(self) -> dict:
        """Convert to API response format."""
        return {"error": self.message, "code": self.code, **self.fields}


class PackageNotFoundError(APIError):
    """Package is not in the index."""

    def __init__(self, package_name: str):
        super().__init__(
            code=ErrorCode.PACKAGE_NOT_FOUND,
            message="Package not found",
            fields={"name": package_name},
        )
        self.package_name = package_name


class VersionNotFoundError(APIError):
    """Package is indexed but the requested version is not."""

    def __init__(self, package_name: str, version: str, available: list[str]):
        super().__init__(
            code=ErrorCode.VERSION_NOT_FOUND,
            message="Version not found",
            fields={"name": package_name, "version": version, "available": available},
        )
        self.package_name = package_name
        self.version = version
        self.available = available


class PackageFileMissingError(APIError):
    """Indexed archive no longer exists on disk; the index is stale."""

    def __init__(self, filename: str):
        super().__init__(
            code=ErrorCode.PACKAGE_FILE_MISSING,
            message="Package file not found on server",
            fields={"filename": filename},
        )
        self.filename = filename
