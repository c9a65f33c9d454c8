"""
CryptoLedger - Order Endpoints

Immediate settlement of buy and sell orders.
"""
from fastapi import APIRouter, Depends, status

from cryptoledger.core.trading.execution import OrderExecutionEngine, OrderRequest
from cryptoledger.dependencies import get_execution_engine
from cryptoledger.schemas.trading import OrderCreate, TransactionResponse

router = APIRouter()


def _to_order(payload: OrderCreate) -> OrderRequest:
    return OrderRequest(
        user_id=payload.user_id,
        wallet_id=payload.wallet_id,
        asset_symbol=payload.asset_symbol,
        amount=payload.amount,
        order_type=payload.order_type,
        limit_price=payload.limit_price,
        client_order_id=payload.client_order_id,
    )


@router.post("/buy", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def buy(
    payload: OrderCreate,
    engine: OrderExecutionEngine = Depends(get_execution_engine),
):
    """
    Buy an asset.

    Debits amount x price plus the trading fee from the wallet and grows
    the position at its new average cost.
    """
    return await engine.execute_buy(_to_order(payload))


@router.post("/sell", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def sell(
    payload: OrderCreate,
    engine: OrderExecutionEngine = Depends(get_execution_engine),
):
    """
    Sell an asset.

    Credits amount x price less the trading fee. Selling the whole
    holding closes the position.
    """
    return await engine.execute_sell(_to_order(payload))
