class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced course, user, student or class does not exist."""


class CourseNotFoundError(NotFoundError):
    def __init__(self, course_id: str):
        super().__init__(f"Course {course_id} does not exist")
        self.course_id = course_id


class AuthenticationError(DomainError):
    """Raised when credentials or the bearer token cannot be resolved."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class PersistenceError(DomainError):
    """Raised for any failure coming from the storage layer."""
