from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"
    default_message = "Business rule violated"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"
    default_message = "Invalid input"


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    code = "not_found"
    default_message = "Not found"


class ConflictError(DomainError):
    """Raised when the request conflicts with the current state."""

    code = "conflict"
    default_message = "Conflict with current state"


# Required fields


class TenantIDRequiredError(ValidationError):
    code = "tenant_id_required"
    default_message = "Tenant ID is required"


class StaffIDRequiredError(ValidationError):
    code = "staff_id_required"
    default_message = "Staff ID is required"


class BranchIDRequiredError(ValidationError):
    code = "branch_id_required"
    default_message = "Branch ID is required"


class DateRequiredError(ValidationError):
    code = "date_required"
    default_message = "Date is required"


class ReasonRequiredError(ValidationError):
    code = "reason_required"
    default_message = "Reason is required"


# Malformed values


class FutureDateError(ValidationError):
    code = "future_date"
    default_message = "Date cannot be in the future"


class InvalidStatusError(ValidationError):
    code = "invalid_status"
    default_message = "Invalid attendance status"


class InvalidHalfDayTypeError(ValidationError):
    code = "invalid_half_day_type"
    default_message = "Invalid half day type"


# Ledger state


class NotCheckedInError(ValidationError):
    code = "not_checked_in"
    default_message = "Not checked in today"


class AlreadyCheckedInError(ConflictError):
    code = "already_checked_in"
    default_message = "Already checked in for today"


class AlreadyCheckedOutError(ConflictError):
    code = "already_checked_out"
    default_message = "Already checked out for today"


class DuplicateAttendanceError(ConflictError):
    code = "duplicate_attendance"
    default_message = "Attendance already recorded for this date"


# Regularization state


class CannotRegularizePendingRequestError(ConflictError):
    code = "pending_regularization_exists"
    default_message = "Pending regularization request already exists for this date"


class RegularizationAlreadyProcessedError(ConflictError):
    code = "regularization_already_processed"
    default_message = "Regularization request has already been processed"


# Lookups


class StaffNotFoundError(NotFoundError):
    code = "staff_not_found"
    default_message = "Staff not found"


class AttendanceNotFoundError(NotFoundError):
    code = "attendance_not_found"
    default_message = "Attendance record not found"


class RegularizationNotFoundError(NotFoundError):
    code = "regularization_not_found"
    default_message = "Regularization request not found"


class SettingsNotFoundError(NotFoundError):
    code = "settings_not_found"
    default_message = "Attendance settings not found"
