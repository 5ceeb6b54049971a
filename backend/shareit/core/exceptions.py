"""
Booking domain exceptions.

Every failure is raised where it is detected and propagated unchanged.
Each class carries the HTTP status it surfaces as, so the single handler in
`shareit.main` only has to render it.
"""

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception."""

    error: str = "INTERNAL_ERROR"

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail, headers=headers)


# --- Not found family -------------------------------------------------------

class NotFoundError(AppException):
    """Resource not found exception."""

    error = "NOT_FOUND"
    resource = "Resource"

    def __init__(self, identifier: int | None = None, detail: str | None = None) -> None:
        self.identifier = identifier
        if detail is None:
            detail = f"{self.resource} not found"
            if identifier is not None:
                detail = f"{self.resource} with id {identifier} not found"
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UserNotFound(NotFoundError):
    resource = "User"


class ItemNotFound(NotFoundError):
    resource = "Item"


class BookingNotFound(NotFoundError):
    resource = "Booking"


class NoItemsForOwner(NotFoundError):
    """The owner has nothing to list bookings for."""

    def __init__(self, user_id: int) -> None:
        super().__init__(user_id, detail=f"User {user_id} has no items")


# --- Ownership / access family ----------------------------------------------
# Surfaced as 404: a caller without rights learns nothing about the booking.

class AccessDenied(AppException):
    error = "NOT_FOUND"

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class OwnerSelfBooking(AccessDenied):
    def __init__(self, item_id: int) -> None:
        super().__init__(f"Owner cannot book their own item {item_id}")


class NotItemOwner(AccessDenied):
    def __init__(self, user_id: int, item_id: int) -> None:
        super().__init__(f"User {user_id} is not the owner of item {item_id}")


class NotAuthorized(AccessDenied):
    def __init__(self, user_id: int, booking_id: int) -> None:
        super().__init__(f"User {user_id} has no access to booking {booking_id}")


# --- Validation family ------------------------------------------------------

class ValidationError(AppException):
    """Request is well-formed but violates a booking rule."""

    error = "BAD_REQUEST"

    def __init__(self, detail: str = "Validation failed") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidInterval(ValidationError):
    def __init__(self, start, end) -> None:
        super().__init__(f"Booking end {end} must be after start {start}")


class ItemUnavailable(ValidationError):
    def __init__(self, item_id: int) -> None:
        super().__init__(f"Item {item_id} is not available for booking")


class AlreadyApproved(ValidationError):
    def __init__(self, booking_id: int) -> None:
        super().__init__(f"Booking {booking_id} is already approved")


class ApprovalFlagRequired(ValidationError):
    def __init__(self) -> None:
        super().__init__("Parameter 'approved' is required")


class CommentNotAllowed(ValidationError):
    """Only a booker whose approved booking of the item has ended may comment."""

    def __init__(self, user_id: int, item_id: int) -> None:
        super().__init__(f"User {user_id} has no finished approved booking of item {item_id}")


class BadRequestCategory(ValidationError):
    """Unknown category literal."""


class UnsupportedStatus(BadRequestCategory):
    error = "Unknown state: UNSUPPORTED_STATUS"

    def __init__(self, literal: str | None = None) -> None:
        self.literal = literal
        super().__init__("Unknown state: UNSUPPORTED_STATUS")


# --- Conflicts --------------------------------------------------------------

class ConflictError(AppException):
    error = "CONFLICT"

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class EmailAlreadyExists(ConflictError):
    def __init__(self, email: str) -> None:
        super().__init__(f"Email {email} is already registered")
