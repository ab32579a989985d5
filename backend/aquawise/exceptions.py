"""
Domain errors raised by the AquaWise services.

Each error carries the HTTP status the API answers with. A capacity
rejection is not an error: the ledger reports it as ``ok=False``.
"""


class AquaWiseError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(AquaWiseError):
    """Malformed request data. Never retried."""
    status_code = 400


class InvalidTimeRange(InvalidInput):
    pass


class InvalidUnitConversion(InvalidInput):
    pass


class InvalidQuantity(InvalidInput):
    pass


class InvalidStatusTransition(AquaWiseError):
    status_code = 409

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change order status from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


class Forbidden(AquaWiseError):
    status_code = 403


class NotFound(AquaWiseError):
    status_code = 404
