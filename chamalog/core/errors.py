"""Domain errors raised by services and mapped to HTTP responses in main.py."""


class ChamaLogError(Exception):
    """Base error carrying a user-facing message and the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCredentialsError(ChamaLogError):
    """Unknown email or wrong password; the message is the same for both."""

    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid email or password.")


class NotFoundError(ChamaLogError):
    status_code = 404


class ConflictError(ChamaLogError):
    """Referential constraint or business rule prevents the operation."""

    status_code = 409


class SelfDeletionError(ConflictError):
    """An admin tried to delete their own account."""

    status_code = 400

    def __init__(self) -> None:
        super().__init__("You cannot delete your own account.")


class ValidationFailedError(ChamaLogError):
    status_code = 400


class InvalidStatusError(ValidationFailedError):
    def __init__(self, status: str) -> None:
        super().__init__(f"Invalid status: {status!r}.")
        self.status = status


class DuplicateEmailError(ValidationFailedError):
    def __init__(self) -> None:
        super().__init__("Email is already in use.")


class UpstreamError(ChamaLogError):
    """A third-party dependency failed or was unreachable."""

    status_code = 502
