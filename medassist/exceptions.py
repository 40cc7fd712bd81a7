"""
Global exception handlers and custom exception classes.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError
from typing import Dict, List, Optional
import logging

from .core.middleware import request_id_of

# Set up logging
logger = logging.getLogger(__name__)

class AppException(Exception):
    """
    Base exception class for application-specific exceptions.
    """
    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class ValidationException(AppException):
    """
    Raised when request fields fail schema constraints.

    Carries field-level errors as a list of {"field": ..., "message": ...} dicts.
    """
    def __init__(self, errors: List[Dict[str, str]], detail: str = "Validation error"):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)
        self.errors = errors

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "ValidationException":
        """Build field-level errors from a pydantic ValidationError."""
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]) or "__root__",
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return cls(errors)


class MissingInputException(ValidationException):
    """Raised when the primary text field of a draft request is empty."""
    def __init__(self, field: str):
        super().__init__(
            errors=[{"field": field, "message": "This field is required."}],
            detail=f"Missing input: {field}"
        )
        self.field = field


class GenerationEmptyException(AppException):
    """Raised when the generation collaborator returned no usable content."""
    def __init__(self, kind: str, detail: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail or f"The AI model did not return a valid {kind} draft."
        )
        self.kind = kind


class GenerationFailedException(AppException):
    """Raised when the generation collaborator call itself failed."""
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class PersistenceException(AppException):
    """Raised when the external record store rejects a write."""
    def __init__(self, detail: str = "Could not save record"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


class PatientNotFoundException(AppException):
    """Raised when a patient lookup must succeed but finds no match."""
    def __init__(self, patient_id: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"Patient {patient_id} not found")
        self.patient_id = patient_id


class DuplicatePatientException(AppException):
    """Raised when the registry rejects a patient id that is already taken."""
    def __init__(self, patient_id: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=f"Patient {patient_id} already exists")
        self.patient_id = patient_id


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    logger.error(f"[{request_id_of(request)}] Application error ({exc.status_code}): {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


async def validation_exception_handler(request: Request, exc: ValidationException):
    """
    Handler for domain validation exceptions.

    Returns:
        JSONResponse: Error response with field-level details
    """
    logger.warning(f"[{request_id_of(request)}] Validation error: {exc.errors}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "errors": exc.errors
        }
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Standardized error response with validation details
    """
    logger.error(f"[{request_id_of(request)}] Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation error",
            "errors": jsonable_encoder(exc.errors())
        }
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ValidationException, validation_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
