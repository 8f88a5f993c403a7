from __future__ import annotations


class PlateGenieError(Exception):
    pass


class ValidationError(PlateGenieError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ConflictError(PlateGenieError):
    pass


class NotFoundError(PlateGenieError):
    pass


class AuthError(PlateGenieError):
    pass


class UnverifiedAccountError(AuthError):
    def __init__(self, message: str = "Please verify your email before logging in."):
        super().__init__(message)


class OwnershipError(AuthError):
    pass


class InvalidCodeError(PlateGenieError):
    def __init__(self, message: str = "Invalid or expired OTP."):
        super().__init__(message)


class UpstreamError(PlateGenieError):
    pass


class UpstreamFormatError(UpstreamError):
    def __init__(self, reason: str, raw_excerpt: str = ""):
        super().__init__(f"Model response is not a JSON array: {reason}")
        self.reason = reason
        self.raw_excerpt = raw_excerpt


class DeliveryError(PlateGenieError):
    def __init__(self, recipient: str, reason: str = "Failed to send verification email."):
        super().__init__(f"{reason} ({recipient})")
        self.recipient = recipient
        self.reason = reason


class StoreError(PlateGenieError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Store error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason
