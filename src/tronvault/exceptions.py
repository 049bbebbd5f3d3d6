"""Domain errors. Each carries an ErrorKind instead of an HTTP status."""

from tronvault.domain.enums import ErrorKind


class TronVaultError(Exception):
    kind: ErrorKind = ErrorKind.EXTERNAL_SERVICE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ExternalServiceError(TronVaultError):
    """Upstream API failure (retriable)."""

    kind = ErrorKind.EXTERNAL_SERVICE


class FatalStartupError(TronVaultError):
    kind = ErrorKind.FATAL_STARTUP


class TransientFetchError(TronVaultError):
    """A scan iteration failed; the cursor is left where it was."""

    kind = ErrorKind.TRANSIENT_FETCH


class DecodeRejection(TronVaultError):
    """Call data is not a recognized transfer or the ABI payload is malformed."""

    kind = ErrorKind.DECODE_REJECTION


class InvalidTransferError(TronVaultError):
    kind = ErrorKind.INVALID_TRANSFER


class TransferNotConfirmedError(TronVaultError):
    kind = ErrorKind.NOT_CONFIRMED


class ConfirmationFailure(TronVaultError):
    """The chain reports that the transaction execution failed."""

    kind = ErrorKind.CONFIRMATION_FAILURE

    def __init__(self, message: str, reason: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason


class ConfirmationTimeout(TronVaultError):
    kind = ErrorKind.CONFIRMATION_TIMEOUT

    def __init__(self, tx_hash: str, attempts: int) -> None:
        super().__init__(f"Exceeded attempts ({attempts}): {tx_hash}")
        self.tx_hash = tx_hash
        self.attempts = attempts


class TransferEventNotFoundError(TronVaultError):
    kind = ErrorKind.EVENT_NOT_FOUND


class DeliveryTransportError(TronVaultError):
    kind = ErrorKind.DELIVERY_TRANSPORT


class WalletNotFoundError(TronVaultError):
    kind = ErrorKind.NOT_FOUND


class InvalidAddressError(TronVaultError):
    kind = ErrorKind.INVALID_INPUT


class InvalidWebhookError(TronVaultError):
    kind = ErrorKind.INVALID_INPUT
