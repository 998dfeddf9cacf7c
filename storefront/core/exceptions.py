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


class ResourceNotFoundError(StorefrontError):
    """
    Raised when a user, session or cart line does not exist.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class UnauthenticatedError(StorefrontError):
    """
    Raised when a request carries no valid session.
    """
    def __init__(self, message: str = "Not logged in", details: Optional[Any] = None):
        super().__init__(message, code="UNAUTHENTICATED", status_code=401, details=details)


class InvalidCredentialsError(StorefrontError):
    """
    Raised when a password does not match the stored hash.
    """
    def __init__(self, message: str = "Invalid credentials", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_CREDENTIALS", status_code=401, details=details)


class InvalidInputError(StorefrontError):
    """
    Raised when a required field is missing or malformed.
    """
    def __init__(self, message: str = "Invalid input", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_INPUT", status_code=400, details=details)


class DuplicateUserError(StorefrontError):
    """
    Raised on signup when the mobile number is already registered.
    """
    def __init__(self, message: str = "User already exists!", details: Optional[Any] = None):
        super().__init__(message, code="DUPLICATE_USER", status_code=400, details=details)


class WriteConflictError(StorefrontError):
    """
    Raised when a user document changed between load and save.
    """
    def __init__(self, message: str = "The account was modified concurrently, please retry", details: Optional[Any] = None):
        super().__init__(message, code="WRITE_CONFLICT", status_code=409, details=details)


class PersistenceError(StorefrontError):
    """
    Raised when the document store is unavailable or rejects an operation.
    """
    def __init__(self, message: str = "Storage operation failed", details: Optional[Any] = None):
        super().__init__(message, code="PERSISTENCE_FAILURE", status_code=500, details=details)
