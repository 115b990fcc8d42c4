"""
Pipeline error taxonomy.

Every error the order pipeline surfaces to its callers is one of these
kinds. Low-level storage and gateway errors are wrapped at the service
boundary with the original exception kept as __cause__.

Notification failures are deliberately absent: they are logged and never
raised.
"""
from typing import Iterable, Optional


class PipelineError(Exception):
    """Base class for order pipeline errors."""

    kind = "pipeline_error"
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OrderValidationError(PipelineError):
    """Missing or inconsistent order input. Raised before any write."""

    kind = "validation_error"

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.fields = list(fields or [])


class OrderNotFoundError(PipelineError):
    """Order does not exist (or is not visible to the caller)."""

    kind = "not_found"

    def __init__(self, order_id):
        super().__init__(f"Order not found: {order_id}")
        self.order_id = order_id


class OrderCreationError(PipelineError):
    """The atomic order-creation block failed and was rolled back."""

    kind = "order_creation_failed"


class PaymentGatewayUnavailableError(PipelineError):
    """Gateway unreachable or timed out. The payment stays pending."""

    kind = "gateway_unavailable"
    retryable = True


class PaymentGatewayError(PipelineError):
    """Gateway answered but rejected the request."""

    kind = "gateway_error"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PaymentVerificationError(PipelineError):
    """Payment could not be authenticated. Permanent for this attempt."""

    kind = "verification_failed"


class InvalidStatusTransitionError(PipelineError):
    """Requested status change is not allowed by the transition table."""

    kind = "invalid_transition"

    def __init__(self, current, requested):
        super().__init__(
            f"Cannot change order status from '{_value(current)}' to '{_value(requested)}'"
        )
        self.current = current
        self.requested = requested


def _value(status) -> str:
    return getattr(status, "value", status)
