"""
Exceptions raised by the transfer service layer.
Mapped to HTTP responses in errors.py.
"""


class PaymentError(Exception):
    """Domain failure carrying a machine-readable error code."""

    def __init__(self, message, error_code="PAYMENT_ERROR"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __repr__(self):
        return f"PaymentError(error_code={self.error_code!r}, message={self.message!r})"


class RequestValidationError(Exception):
    """Request body failed field-level checks before reaching the service."""

    def __init__(self, field_errors, message="Invalid request parameters"):
        super().__init__(message)
        self.message = message
        # list of {"field": ..., "message": ...}
        self.field_errors = field_errors
