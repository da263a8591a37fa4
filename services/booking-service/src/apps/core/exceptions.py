"""
Booking Service Exceptions.

Raised by the service layer and rendered by
``shared.common.exceptions.custom_exception_handler``.
"""
from shared.common.exceptions import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    InternalServerException,
    NotFoundException,
    UnauthorizedException,
    ValidationException,
)


# =============================================================================
# NOT FOUND
# =============================================================================

class UserNotFound(NotFoundException):
    default_detail = 'User not found.'
    error_code = 'USER_NOT_FOUND'


class ServiceNotFound(NotFoundException):
    default_detail = 'Service not found.'
    error_code = 'SERVICE_NOT_FOUND'


class BookingNotFound(NotFoundException):
    default_detail = 'Booking not found.'
    error_code = 'BOOKING_NOT_FOUND'


class PaymentNotFound(NotFoundException):
    default_detail = 'Payment record not found.'
    error_code = 'PAYMENT_NOT_FOUND'


class FeedbackNotFound(NotFoundException):
    default_detail = 'Feedback not found.'
    error_code = 'FEEDBACK_NOT_FOUND'


class NotificationNotFound(NotFoundException):
    default_detail = 'Notification not found.'
    error_code = 'NOTIFICATION_NOT_FOUND'


# =============================================================================
# BOOKING LIFECYCLE
# =============================================================================

class InvalidAdmin(ForbiddenException):
    """The acting user is missing or not an administrator."""
    default_detail = 'Invalid admin'
    error_code = 'INVALID_ADMIN'


class InvalidPrice(BadRequestException):
    default_detail = 'Invalid booking price.'
    error_code = 'INVALID_PRICE'


class BookingValidationError(ValidationException):
    pass


# =============================================================================
# PAYMENTS
# =============================================================================

class BookingNotAccepted(BadRequestException):
    default_detail = 'Booking is not yet accepted.'
    error_code = 'BOOKING_NOT_ACCEPTED'


class PaymentAlreadyExists(BadRequestException):
    default_detail = 'Payment already exists for this booking.'
    error_code = 'PAYMENT_ALREADY_EXISTS'


class DuplicatePayment(ConflictException):
    """Lost the race against a concurrent initialization for the same booking."""
    default_detail = 'A payment for this booking was created concurrently.'
    error_code = 'DUPLICATE_PAYMENT'


class PaymentVerificationFailed(BadRequestException):
    default_detail = 'Payment verification failed.'
    error_code = 'PAYMENT_VERIFICATION_FAILED'


class InvalidWebhookSignature(UnauthorizedException):
    default_detail = 'Invalid webhook signature.'
    error_code = 'INVALID_SIGNATURE'


class PaymentGatewayError(InternalServerException):
    default_detail = 'Payment gateway request failed.'
    error_code = 'PAYMENT_GATEWAY_ERROR'


class PaymentGatewayTimeout(PaymentGatewayError):
    default_detail = 'Payment gateway did not respond in time. Please try again.'
    error_code = 'PAYMENT_GATEWAY_TIMEOUT'

    def __init__(self, detail: str = None):
        super().__init__(detail=detail, extra_data={'retryable': True})


# =============================================================================
# ACCOUNTS & CATALOG
# =============================================================================

class EmailAlreadyExists(ConflictException):
    default_detail = 'Email already exists.'
    error_code = 'EMAIL_EXISTS'


class InvalidCredentials(UnauthorizedException):
    default_detail = 'Invalid email or password.'
    error_code = 'INVALID_CREDENTIALS'


class DuplicateService(ConflictException):
    default_detail = 'A service with this name and type already exists.'
    error_code = 'DUPLICATE_SERVICE'
