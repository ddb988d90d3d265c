"""
Domain errors for the service center API.

    ServiceCenterError (base)
    ├── ValidationError     - malformed or missing input (400)
    ├── NotFound            - referenced entity absent (404)
    ├── Forbidden           - authenticated but not allowed on this resource (403)
    ├── InsufficientStock   - part stock too low for the requested quantity (400)
    ├── Conflict            - username already taken (409)
    └── StoreError          - document could not be read or written (500)

``main.py`` maps each class to its HTTP status and renders
``{"message": ...}`` so the frontend can show it as is.
"""

from typing import Any, Dict, Optional


class ServiceCenterError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ServiceCenterError):
    status_code = 400


class NotFound(ServiceCenterError):
    status_code = 404


class Forbidden(ServiceCenterError):
    status_code = 403


class InsufficientStock(ServiceCenterError):
    """Requested quantity exceeds what is left of a part."""

    status_code = 400

    def __init__(self, part_name: str, remaining: int):
        message = f"Not enough stock for {part_name}. Only {remaining} left."
        super().__init__(message, {"part_name": part_name, "remaining": remaining})
        self.part_name = part_name
        self.remaining = remaining


class Conflict(ServiceCenterError):
    status_code = 409


class StoreError(ServiceCenterError):
    status_code = 500
