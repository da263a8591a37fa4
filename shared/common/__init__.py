# Shared Common Library for the booking platform.
# Authentication, permissions, exceptions, pagination and model mixins
# used by the platform's Django services.

__version__ = "1.0.0"
