"""
Standardized API response helpers.

Provides consistent JSON response format across all API endpoints:

    Success:  {"success": true, "data": {...}, "message": "..."}
    Error:    {"success": false, "error": "DriverAlreadyBooked", "message": "..."}
    Warning:  {"success": true, "data": {...}, "warning": "..."}

Usage:
    from utils.api_response import api_success, api_error

    return api_success(data={'id': 1}, message='Booking created', status=201)
    return api_error('InvalidDate', 400, message='Use YYYY-MM-DD')
"""

from flask import jsonify
from typing import Any


def api_success(
    data: dict | list | None = None,
    message: str | None = None,
    warning: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Build a standardized success JSON response.

    Args:
        data: Optional payload to include as 'data' key.
        message: Optional success message.
        warning: Optional non-fatal warning (e.g. confirmation email not sent).
        status: HTTP status code (default 200).
        **extra_fields: Additional top-level fields to include in the response
            (e.g. drivers, booking, rejected_candidates).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': True}

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if warning:
        response['warning'] = warning

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_error(error: str, status: int = 400, message: str | None = None, **extra_fields: Any) -> tuple:
    """
    Build a standardized error JSON response.

    Args:
        error: Machine-readable error kind (e.g. 'InvalidGroupSize').
        status: HTTP status code (default 400).
        message: Human-readable explanation.
        **extra_fields: Additional top-level fields (e.g. errors, rejected_candidates).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': False, 'error': error}

    if message:
        response['message'] = message

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_exception(exc) -> tuple:
    """
    Build an error response from a BookingError.

    Args:
        exc: models.errors.BookingError instance

    Returns:
        Tuple of (Response, status_code)
    """
    return api_error(exc.kind, exc.status, message=exc.message, **exc.to_extra())
