"""
CryptoLedger - Custom Exceptions
Ledger error taxonomy with HTTP error handling
"""
from typing import Optional, Any, Dict
from fastapi import Request, status
from fastapi.responses import JSONResponse


class LedgerError(Exception):
    """Base exception for CryptoLedger."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str = "An error occurred",
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


# =========================
# Not Found
# =========================

class NotFoundError(LedgerError):
    """
    Requested entity does not exist.

    Also raised on ownership mismatch so callers cannot discover
    entities belonging to other users.
    """

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(message=message, code=code)


class WalletNotFoundError(NotFoundError):
    """Wallet not found for this user."""

    def __init__(self, message: str = "Wallet not found"):
        super().__init__(message=message, code="WALLET_NOT_FOUND")


class AssetNotFoundError(NotFoundError):
    """Asset symbol unknown to the price oracle."""

    def __init__(self, symbol: str = ""):
        message = f"Asset '{symbol}' not found" if symbol else "Asset not found"
        super().__init__(message=message, code="ASSET_NOT_FOUND")


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message=message, code="USER_NOT_FOUND")


# =========================
# Invalid Argument
# =========================

class InvalidArgumentError(LedgerError):
    """Malformed order parameters."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Invalid argument", code: str = "INVALID_ARGUMENT"):
        super().__init__(message=message, code=code)


# =========================
# Failed Precondition
# =========================

class FailedPreconditionError(LedgerError):
    """Order is well formed but the ledger state does not allow it."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(
        self,
        message: str = "Failed precondition",
        code: str = "FAILED_PRECONDITION",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, code=code, details=details)


class InsufficientBalanceError(FailedPreconditionError):
    """Wallet balance does not cover the order cost."""

    def __init__(self, required=None, available=None):
        message = "Insufficient balance"
        details = {}
        if required is not None and available is not None:
            message = f"Insufficient balance. Required: {required}, Available: {available}"
            details = {"required": str(required), "available": str(available)}
        super().__init__(message=message, code="INSUFFICIENT_BALANCE", details=details)


class NoPositionError(FailedPreconditionError):
    """User holds no position in the asset."""

    def __init__(self, symbol: str = ""):
        message = f"No position in {symbol}" if symbol else "No position"
        super().__init__(message=message, code="NO_POSITION")


class InsufficientHoldingsError(FailedPreconditionError):
    """Position amount is smaller than the sell amount."""

    def __init__(self, requested=None, held=None):
        message = "Insufficient holdings"
        details = {}
        if requested is not None and held is not None:
            message = f"Insufficient holdings. Requested: {requested}, Held: {held}"
            details = {"requested": str(requested), "held": str(held)}
        super().__init__(message=message, code="INSUFFICIENT_HOLDINGS", details=details)


# =========================
# Internal
# =========================

class InternalError(LedgerError):
    """Ledger store I/O failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal ledger error"):
        super().__init__(message=message, code="INTERNAL")


# =========================
# HTTP Exception Handler
# =========================

async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Render a LedgerError with its mapped HTTP status."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.message,
            "code": exc.code,
            "details": exc.details,
        },
    )
