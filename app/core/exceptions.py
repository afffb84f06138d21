from typing import Optional, Any


class StorefrontError(Exception):
    """
    Base exception for the storefront application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class Unauthorized(StorefrontError):
    """
    Raised when no valid session is present.
    """
    def __init__(self, message: str = "Unauthorized - Please login", details: Optional[Any] = None):
        super().__init__(message, code="UNAUTHORIZED", status_code=401, details=details)


class ForbiddenRole(StorefrontError):
    """
    Raised when a valid session carries the wrong role.
    """
    def __init__(self, required_role: str, actual_role: Optional[str] = None, message: Optional[str] = None):
        self.required_role = required_role
        self.actual_role = actual_role
        super().__init__(
            message or f"{required_role.capitalize()} access required",
            code="FORBIDDEN_ROLE",
            status_code=403,
            details={"requiredRole": required_role},
        )


class ResourceNotFoundError(StorefrontError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class ConflictError(StorefrontError):
    """
    Raised when a unique value (slug, e-mail, GST number, coupon code) is already taken.
    """
    def __init__(self, message: str = "Resource already exists", details: Optional[Any] = None):
        super().__init__(message, code="CONFLICT", status_code=409, details=details)


class ValidationError(StorefrontError):
    """
    Raised at the HTTP seam when a submitted form fails validation.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)
