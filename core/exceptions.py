"""
Custom exception classes and error handling.

Errors from the BMI core surface to clients as HTTP 400 with a
plain-text body.
"""
from fastapi import HTTPException, status
from typing import Optional, Dict, Any

INVALID_MEASUREMENTS = "Weight and height must be positive numbers"
BMI_OUT_OF_RANGE = "BMI is out of range for the given weight and height"
INVALID_REQUEST_BODY = "Invalid request body"


class APIException(HTTPException):
    """Base API exception with consistent structure."""
    
    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class BmiValidationError(APIException):
    """Weight or height rejected before (or right after) computation."""
    
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )
