class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class ValidationError(AppError):
    """Raised when a candidate record breaks a validation rule. Nothing is mutated."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class ConflictError(AppError):
    """Raised when a teacher or class is already booked for the requested slot."""
    def __init__(self, message: str, conflicts: list[dict]):
        super().__init__(message, status_code=409, details={"conflicts": conflicts})
        self.conflicts = conflicts

class NotFoundError(AppError):
    """Raised when a requested entity is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with id {resource_id} not found",
            status_code=404,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id

class PersistenceError(AppError):
    """Raised when a committed snapshot could not be written."""
    def __init__(self, message: str):
        super().__init__(message, status_code=500)
