"""Failure taxonomy shared by the CLI and the HTTP service."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ConversionError(Exception):
    """Base exception for every conversion failure."""

    stage = "conversion"
    exit_code = 1

    def __init__(self, message: str, error_code: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to JSON-serializable dict"""
        return {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
            "stage": self.stage,
            "details": self.details,
        }


class ConfigurationError(ConversionError):
    """A conversion parameter is missing, malformed or out of range."""

    stage = "configuration"
    exit_code = 2

    def __init__(self, field: str, value: Any, expected: str) -> None:
        super().__init__(
            message=f"Invalid {field} {value!r}: expected {expected}",
            error_code="INVALID_SETTING",
            details={"field": field, "value": repr(value), "expected": expected},
        )


class DecodeError(ConversionError):
    """The input could not be read or is not a supported image."""

    stage = "decode"
    exit_code = 3

    def __init__(self, source: str, reason: Optional[str] = None) -> None:
        super().__init__(
            message=f"Failed to decode input image {source}",
            error_code="DECODE_FAILED",
            details={"source": source, "reason": reason},
        )


class SourceFetchError(DecodeError):
    """A remote source could not be downloaded."""

    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        super().__init__(url, reason)
        self.message = f"Failed to fetch input image from {url}"
        self.error_code = "SOURCE_FETCH_FAILED"
        self.args = (self.message,)


class EncodeError(ConversionError):
    """The output could not be encoded or written."""

    stage = "encode"
    exit_code = 4

    def __init__(self, target: str, reason: Optional[str] = None) -> None:
        super().__init__(
            message=f"Failed to write output image {target}",
            error_code="ENCODE_FAILED",
            details={"target": target, "reason": reason},
        )


class DegenerateImageError(ConversionError):
    """The decoded image has no pixels to process."""

    stage = "validation"
    exit_code = 5

    def __init__(self, width: int, height: int) -> None:
        super().__init__(
            message=f"Cannot convert a {width}x{height} image",
            error_code="DEGENERATE_IMAGE",
            details={"width": width, "height": height},
        )
