from enum import Enum


class ErrorKind(str, Enum):
    """Domain error categories. HTTP mapping, if any, happens at the API boundary."""

    FATAL_STARTUP = "FATAL_STARTUP"
    TRANSIENT_FETCH = "TRANSIENT_FETCH"
    DECODE_REJECTION = "DECODE_REJECTION"
    INVALID_TRANSFER = "INVALID_TRANSFER"
    NOT_CONFIRMED = "NOT_CONFIRMED"
    CONFIRMATION_FAILURE = "CONFIRMATION_FAILURE"
    CONFIRMATION_TIMEOUT = "CONFIRMATION_TIMEOUT"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    DELIVERY_TRANSPORT = "DELIVERY_TRANSPORT"
    NOT_FOUND = "NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
