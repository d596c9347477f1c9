from typing import Any, Dict, List, Optional

from flask import jsonify

from .errors import APIError, ConfigurationError, NetworkError, TeamNotFound, UpstreamError, ValidationError


def status_for_error(error: Exception) -> int:
    """HTTP status used when an error reaches the JSON surface."""
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, TeamNotFound):
        return 404
    if isinstance(error, NetworkError):
        return 503
    if isinstance(error, UpstreamError):
        return 502
    if isinstance(error, ConfigurationError):
        return 500
    return 500


def _build_success_payload(data: Optional[Any], message: str, warnings: Optional[List[str]]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "status": "ok",
        "message": message,
        "data": data,
    }
    if warnings:
        payload["warnings"] = [str(w) for w in warnings]
    return payload


def make_ok(
    data: Optional[Any] = None,
    message: str = "success",
    status_code: int = 200,
    warnings: Optional[List[str]] = None,
):
    """Return a standardized success response."""
    response = jsonify(_build_success_payload(data, message, warnings))
    return response, status_code


def make_error(error: Any, message: str = "An error occurred", status_code: Optional[int] = None):
    """Return a standardized error response; status derives from the error type when omitted."""
    if status_code is None:
        status_code = status_for_error(error) if isinstance(error, Exception) else 400
    if isinstance(error, (APIError, ValidationError)):
        error = error.to_dict()

    payload = {
        "status": "error",
        "message": message,
        "error": error,
    }
    return jsonify(payload), status_code
