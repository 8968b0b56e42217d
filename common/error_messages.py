"""
User-friendly error messages.

This module provides centralized error message definitions that are
user-friendly and avoid exposing technical implementation details.
Every action endpoint reports failures as ``{"success": false, "error": ...}``
built from these messages.
"""
from typing import Optional
from enum import Enum

class ErrorCode(str, Enum):
    """Error codes for different types of failures."""

    # Validation Errors
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    INVALID_IMAGE_DATA = "INVALID_IMAGE_DATA"

    # Not Found Errors
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"

    # Generation Errors
    OPTIMIZATION_FAILED = "OPTIMIZATION_FAILED"
    IMAGE_GENERATION_FAILED = "IMAGE_GENERATION_FAILED"
    EDIT_FAILED = "EDIT_FAILED"
    BATCH_GENERATION_FAILED = "BATCH_GENERATION_FAILED"
    FUSION_FAILED = "FUSION_FAILED"

    # Generic Errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


ERROR_MESSAGES = {
    # Validation Errors
    ErrorCode.MISSING_FIELD: "Required information is missing. Please check your input and try again.",
    ErrorCode.INVALID_PARAMETER: "One or more parameters are invalid. Please review your request and try again.",
    ErrorCode.INVALID_IMAGE_DATA: "The image data provided is invalid or corrupted. Please try with a different image.",

    # Not Found Errors
    ErrorCode.SESSION_NOT_FOUND: "We couldn't find that design session. It may have expired.",

    # Generation Errors
    ErrorCode.OPTIMIZATION_FAILED: "Prompt optimization failed. Please try again.",
    ErrorCode.IMAGE_GENERATION_FAILED: "Thumbnail generation failed. Please try again or adjust your prompt.",
    ErrorCode.EDIT_FAILED: "Thumbnail edit failed. Please try again or rephrase your edit.",
    ErrorCode.BATCH_GENERATION_FAILED: "Batch generation failed. Please try again.",
    ErrorCode.FUSION_FAILED: "Image fusion failed. Please try again with different images or settings.",

    # Generic Errors
    ErrorCode.UNKNOWN_ERROR: "Something unexpected happened. Please try again.",
}


def format_error_detail(error_code: ErrorCode, detail: Optional[str] = None) -> str:
    """
    Format error detail for API response.

    Args:
        error_code: The error code enum
        detail: Optional additional detail (e.g. the provider's message)

    Returns:
        Formatted error message
    """
    base_message = ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCode.UNKNOWN_ERROR])

    if detail:
        return f"{base_message} ({detail})"

    return base_message


def action_failure(error_code: ErrorCode, detail: Optional[str] = None) -> dict:
    """Build the uniform failure payload returned by every action endpoint."""
    return {"success": False, "error": format_error_detail(error_code, detail)}
