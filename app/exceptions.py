# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code and, where one exists, a
# suggestion telling the caller how to recover.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)


class OnboardingException(Exception):
    """
    Base exception for the onboarding API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "ONBOARDING_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Brand Exceptions
# =============================================================================

class BrandNotFoundError(OnboardingException):
    """Raised when a brand ID (or slug) doesn't exist."""

    def __init__(self, brand_ref: str):
        super().__init__(
            message=f"Brand not found: {brand_ref}",
            code="BRAND_NOT_FOUND",
            status_code=404,
            suggestion="Check that the brand exists with GET /brands",
            details={"brand": brand_ref}
        )


class BrandSlugConflictError(OnboardingException):
    """Raised when a new brand's slug collides with an existing brand."""

    def __init__(self, slug: str, error: str):
        super().__init__(
            message=f"A brand with slug '{slug}' already exists",
            code="BRAND_SLUG_CONFLICT",
            status_code=409,
            suggestion="Choose a different brand name",
            details={"slug": slug, "error": error}
        )


# =============================================================================
# Asset Exceptions
# =============================================================================

class AssetNotFoundError(OnboardingException):
    """Raised when an asset ID doesn't exist for the brand."""

    def __init__(self, asset_id: str):
        super().__init__(
            message=f"Asset not found: {asset_id}",
            code="ASSET_NOT_FOUND",
            status_code=404,
            suggestion="Refresh the asset list; it may already have been deleted",
            details={"asset_id": asset_id}
        )


class AssetPathError(OnboardingException):
    """Raised when a stored asset URL doesn't point into the asset bucket."""

    def __init__(self, url: str, marker: str):
        super().__init__(
            message=f"Cannot derive storage path from URL: {url}",
            code="ASSET_PATH_ERROR",
            status_code=400,
            suggestion=f"Asset URLs must contain '{marker}' followed by the object key",
            details={"url": url, "marker": marker}
        )


class InvalidFileTypeError(OnboardingException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            code="INVALID_FILE_TYPE",
            status_code=400,
            suggestion=f"Only these file types are supported: {', '.join(allowed)}",
            details={"filename": filename, "allowed_types": allowed}
        )


class FileTooLargeError(OnboardingException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, filename: str, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {filename} is {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"filename": filename, "size_mb": size_mb, "max_mb": max_mb}
        )


class StorageUploadError(OnboardingException):
    """Raised when file upload to storage fails."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to upload file to storage: {error}",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"path": path, "error": error}
        )


class StorageDeleteError(OnboardingException):
    """Raised when removing a file from storage fails."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to delete file from storage: {error}",
            code="STORAGE_DELETE_ERROR",
            status_code=500,
            suggestion="The asset record was kept; retry the delete",
            details={"path": path, "error": error}
        )


class StorageDownloadError(OnboardingException):
    """Raised when file download from storage fails."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to download file from storage: {error}",
            code="STORAGE_DOWNLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"path": path, "error": error}
        )


class BatchUploadError(OnboardingException):
    """
    Raised when one file of a multi-file upload fails.

    Files before the failing one stay uploaded; files after it are
    never attempted.
    """

    def __init__(
        self,
        failed_filename: str,
        error: Exception,
        uploaded: list[dict[str, Any]],
        not_attempted: list[str],
    ):
        reason = getattr(error, "message", None) or str(error)
        super().__init__(
            message=f"Upload of {failed_filename} failed: {reason}",
            code="BATCH_UPLOAD_FAILED",
            status_code=getattr(error, "status_code", 502),
            suggestion="Retry the failed file and the ones after it",
            details={
                "failed_filename": failed_filename,
                "uploaded": [row.get("filename") for row in uploaded],
                "not_attempted": not_attempted,
            }
        )
        self.error = error
        self.uploaded = uploaded
        self.not_attempted = not_attempted


# =============================================================================
# Client / Workflow Exceptions
# =============================================================================

class RecordNotFoundError(OnboardingException):
    """Raised when a client or workflow ID doesn't exist."""

    def __init__(self, table: str, record_id: str):
        entity = table.rstrip("s")
        super().__init__(
            message=f"{entity.capitalize()} not found: {record_id}",
            code=f"{entity.upper()}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {entity} id is correct",
            details={"table": table, "id": record_id}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthenticationError(OnboardingException):
    """Raised when the identity service rejects a sign-up, sign-in or sign-out."""

    def __init__(self, error: str):
        super().__init__(
            message=error,
            code="AUTHENTICATION_FAILED",
            status_code=401,
            suggestion="Check the email and password and try again",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def onboarding_exception_handler(
    request: Request,
    exc: OnboardingException
) -> JSONResponse:
    """
    Convert OnboardingException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def supabase_exception_handler(
    request: Request,
    exc: SupabaseClientError
) -> JSONResponse:
    """
    Surface record store failures verbatim.

    The store is an upstream service, so its failures map to 502.
    """
    logger.error(f"Record store error on {request.method} {request.url.path}: {exc}")
    content = {
        "detail": exc.message,
        "code": exc.code,
    }
    if exc.suggestion:
        content["suggestion"] = exc.suggestion
    return JSONResponse(status_code=502, content=content)
