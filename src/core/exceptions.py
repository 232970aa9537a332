"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    NOT_GROUP_OWNER = "NOT_GROUP_OWNER"

    # Not found errors (404)
    GROUP_NOT_FOUND = "GROUP_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN_CATEGORY = "UNKNOWN_CATEGORY"
    DUPLICATE_CATEGORY = "DUPLICATE_CATEGORY"

    # Group state errors (400)
    GROUP_INACTIVE = "GROUP_INACTIVE"
    GROUP_FULL = "GROUP_FULL"
    ALREADY_A_GROUP_MEMBER = "ALREADY_A_GROUP_MEMBER"
    CAPACITY_BELOW_MEMBERS = "CAPACITY_BELOW_MEMBERS"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(
        self,
        message: str = "Access denied",
        error_code: ErrorCode = ErrorCode.FORBIDDEN,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=403,
            details=details,
        )


class GroupNotFoundError(AppException):
    """Group not found."""

    def __init__(self, group_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.GROUP_NOT_FOUND,
            message="Group not found",
            status_code=404,
            details={"group_id": group_id},
        )


class GroupOwnershipError(AuthorizationError):
    """Acting user is not the creator of the group."""

    def __init__(self, group_id: str, action: str = "update") -> None:
        super().__init__(
            message=f"You are not authorized to {action} this group",
            error_code=ErrorCode.NOT_GROUP_OWNER,
            details={"group_id": group_id},
        )


class GroupInactiveError(AppException):
    """Group start date has passed."""

    def __init__(self, group_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.GROUP_INACTIVE,
            message="This group is no longer active",
            status_code=400,
            details={"group_id": group_id},
        )


class GroupFullError(AppException):
    """Group has reached its maximum member count."""

    def __init__(self, group_id: str, max_members: int) -> None:
        super().__init__(
            error_code=ErrorCode.GROUP_FULL,
            message="This group is already full",
            status_code=400,
            details={"group_id": group_id, "max_members": max_members},
        )


class AlreadyAGroupMemberError(AppException):
    """User is already a member of the group."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_A_GROUP_MEMBER,
            message="You are already a member of this group",
            status_code=400,
            details={"email": email},
        )


class GroupCapacityBelowMembersError(AppException):
    """Requested capacity is lower than the current member count."""

    def __init__(self, max_members: int, member_count: int) -> None:
        super().__init__(
            error_code=ErrorCode.CAPACITY_BELOW_MEMBERS,
            message=(
                f"Maximum members cannot be lower than the current "
                f"member count ({member_count})"
            ),
            status_code=400,
            details={"max_members": max_members, "member_count": member_count},
        )


class UnknownCategoryError(AppException):
    """Category is not in the registry."""

    def __init__(self, category: str) -> None:
        super().__init__(
            error_code=ErrorCode.UNKNOWN_CATEGORY,
            message=f"Unknown category: {category}",
            status_code=400,
            details={"category": category},
        )


class DuplicateCategoryError(AppException):
    """Category name already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_CATEGORY,
            message=f"Category already exists: {name}",
            status_code=400,
            details={"name": name},
        )
