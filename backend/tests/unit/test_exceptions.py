"""
Unit Tests - Exceptions
Tests for the ledger error taxonomy and its HTTP rendering.
"""
import json
from decimal import Decimal

import pytest

from cryptoledger.utils.exceptions import (
    AssetNotFoundError,
    FailedPreconditionError,
    InsufficientBalanceError,
    InsufficientHoldingsError,
    InternalError,
    InvalidArgumentError,
    LedgerError,
    NoPositionError,
    NotFoundError,
    UserNotFoundError,
    WalletNotFoundError,
    ledger_error_handler,
)


class TestTaxonomy:
    """Status and code mapping."""

    @pytest.mark.parametrize("exc, status, code", [
        (WalletNotFoundError(), 404, "WALLET_NOT_FOUND"),
        (AssetNotFoundError("DOGE"), 404, "ASSET_NOT_FOUND"),
        (UserNotFoundError(), 404, "USER_NOT_FOUND"),
        (InvalidArgumentError("Limit price is required for limit orders"), 400, "INVALID_ARGUMENT"),
        (InsufficientBalanceError(), 409, "INSUFFICIENT_BALANCE"),
        (NoPositionError("BTC"), 409, "NO_POSITION"),
        (InsufficientHoldingsError(), 409, "INSUFFICIENT_HOLDINGS"),
        (InternalError(), 500, "INTERNAL"),
    ])
    def test_status_and_code(self, exc, status, code):
        assert isinstance(exc, LedgerError)
        assert exc.status_code == status
        assert exc.code == code

    def test_subclasses_share_kind(self):
        assert issubclass(WalletNotFoundError, NotFoundError)
        assert issubclass(InsufficientBalanceError, FailedPreconditionError)
        assert issubclass(NoPositionError, FailedPreconditionError)
        assert issubclass(InsufficientHoldingsError, FailedPreconditionError)

    def test_insufficient_balance_details(self):
        exc = InsufficientBalanceError(required=Decimal("4329.40508"), available=Decimal("100"))

        assert "Required: 4329.40508" in exc.message
        assert exc.details == {"required": "4329.40508", "available": "100"}

    def test_asset_message_names_symbol(self):
        assert str(AssetNotFoundError("DOGE")) == "Asset 'DOGE' not found"


class TestHandler:
    """Tests for ledger_error_handler."""

    @pytest.mark.asyncio
    async def test_renders_body(self):
        response = await ledger_error_handler(None, InsufficientHoldingsError(requested=Decimal("1"), held=Decimal("0.5")))

        assert response.status_code == 409
        body = json.loads(response.body)
        assert body["code"] == "INSUFFICIENT_HOLDINGS"
        assert body["detail"].startswith("Insufficient holdings")
        assert body["details"] == {"requested": "1", "held": "0.5"}
