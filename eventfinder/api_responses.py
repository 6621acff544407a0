"""
API Response Utilities - Standardized acknowledgements and error bodies
"""

from flask import jsonify
import logging

logger = logging.getLogger(__name__)


# API Error Codes
class ErrorCode:
    SUCCESS = "SUCCESS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"


def success_response(data=None, message=None, status_code=200):
    """
    Standard acknowledgement for mutating endpoints
    """
    response = {"code": ErrorCode.SUCCESS, "success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return jsonify(response), status_code


def error_response(error_code=ErrorCode.INTERNAL_ERROR, message=None, status_code=400):
    """
    Error body in the same shape the exception handlers produce
    """
    if not message:
        if error_code == ErrorCode.NOT_FOUND:
            message = "Resource not found"
        elif error_code == ErrorCode.VALIDATION_ERROR:
            message = "Invalid request parameters"
        else:
            message = "An unexpected error occurred"

    if status_code >= 500:
        logger.error(f"{error_code}: {message}")

    return jsonify({"error": True, "code": error_code, "message": message}), status_code


def not_found_response(resource_type, resource_id=None):
    """
    Convenience function for not found errors
    """
    if resource_id:
        message = f"{resource_type} '{resource_id}' not found"
    else:
        message = f"{resource_type} not found"
    return error_response(ErrorCode.NOT_FOUND, message=message, status_code=404)
