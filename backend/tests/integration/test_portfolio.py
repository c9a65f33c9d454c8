"""
Integration Tests - Portfolio and Dashboard
Read-side valuation against live prices.
"""
from decimal import Decimal

import pytest

from cryptoledger.core.portfolio.dashboard import DashboardService
from cryptoledger.core.portfolio.valuation import PortfolioValuator
from cryptoledger.core.trading.execution import OrderExecutionEngine, OrderRequest
from cryptoledger.utils.exceptions import UserNotFoundError

pytestmark = pytest.mark.integration


class TestPortfolioValuator:

    @pytest.mark.asyncio
    async def test_empty_portfolio(self, db_session, seeded):
        valuator = PortfolioValuator(db_session)

        assert await valuator.get_portfolio(seeded.user_id) == []
        summary = await valuator.get_summary(seeded.user_id)
        assert summary.total_value == Decimal("0")
        assert summary.top_performing_asset is None

    @pytest.mark.asyncio
    async def test_positions_marked_to_live_price(self, db_session, seeded, seed_position):
        await seed_position(seeded.user_id, "BTC", "0.5", "40000")
        await seed_position(seeded.user_id, "ETH", "2", "3000")

        portfolio = await PortfolioValuator(db_session).get_portfolio(seeded.user_id)

        assert [p.asset_symbol for p in portfolio] == ["BTC", "ETH"]
        btc, eth = portfolio
        assert btc.current_price == Decimal("43250.8")
        assert btc.current_value == Decimal("21625.40")
        assert btc.profit_loss == Decimal("1625.40")
        assert eth.profit_loss == Decimal("-699.10")

    @pytest.mark.asyncio
    async def test_reads_follow_price_moves(self, session_maker, seeded, seed_position, set_price):
        await seed_position(seeded.user_id, "SOL", "10", "100")
        await set_price("SOL", "120")

        async with session_maker() as session:
            summary = await PortfolioValuator(session).get_summary(seeded.user_id)

        assert summary.total_value == Decimal("1200.00")
        assert summary.total_profit_loss == Decimal("200.00")
        assert summary.total_investment == Decimal("1000.00")
        assert summary.total_profit_loss_percentage == Decimal("20.00")

    @pytest.mark.asyncio
    async def test_repeated_reads_are_identical(self, db_session, seeded, seed_position):
        await seed_position(seeded.user_id, "BTC", "0.5", "40000")
        valuator = PortfolioValuator(db_session)

        assert await valuator.get_portfolio(seeded.user_id) == await valuator.get_portfolio(seeded.user_id)
        assert await valuator.get_summary(seeded.user_id) == await valuator.get_summary(seeded.user_id)

    @pytest.mark.asyncio
    async def test_position_without_asset_is_skipped(self, db_session, seeded, seed_position):
        # SQLite does not enforce the foreign key, which lets us orphan a position
        await seed_position(seeded.user_id, "GHOST", "1", "1")
        await seed_position(seeded.user_id, "ETH", "1", "2000")

        portfolio = await PortfolioValuator(db_session).get_portfolio(seeded.user_id)

        assert [p.asset_symbol for p in portfolio] == ["ETH"]

    @pytest.mark.asyncio
    async def test_other_users_positions_excluded(self, db_session, seeded, seed_position):
        await seed_position(seeded.other_user_id, "BTC", "1", "40000")

        assert await PortfolioValuator(db_session).get_portfolio(seeded.user_id) == []

    @pytest.mark.asyncio
    async def test_zero_cost_basis(self, db_session, seeded, seed_position):
        await seed_position(seeded.user_id, "SOL", "5", "0")

        (position,) = await PortfolioValuator(db_session).get_portfolio(seeded.user_id)

        assert position.profit_loss_percentage == Decimal("0")


class TestDashboardService:

    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session, seeded):
        with pytest.raises(UserNotFoundError):
            await DashboardService(db_session).get_dashboard(424242)

    @pytest.mark.asyncio
    async def test_new_user_dashboard(self, db_session, seeded):
        dashboard = await DashboardService(db_session).get_dashboard(seeded.user_id)

        assert dashboard.user_id == seeded.user_id
        assert dashboard.recent_transactions == []
        assert dashboard.portfolio_breakdown == []
        assert dashboard.portfolio_summary.position_count == 0
        assert [a.symbol for a in dashboard.watchlist] == ["BTC", "ETH", "SOL"]

    @pytest.mark.asyncio
    async def test_dashboard_after_trading(self, session_maker, seeded, lock_registry):
        for symbol, amount in (("BTC", "0.01"), ("ETH", "0.5"), ("SOL", "3")):
            async with session_maker() as session:
                await OrderExecutionEngine(session, lock_registry=lock_registry).execute_buy(
                    OrderRequest(
                        user_id=seeded.user_id,
                        wallet_id=seeded.wallet_id,
                        asset_symbol=symbol,
                        amount=Decimal(amount),
                    )
                )

        async with session_maker() as session:
            dashboard = await DashboardService(session, recent_limit=2, watchlist_size=1).get_dashboard(seeded.user_id)

        assert [t.asset_symbol for t in dashboard.recent_transactions] == ["SOL", "ETH"]
        assert [p.asset_symbol for p in dashboard.portfolio_breakdown] == ["BTC", "ETH", "SOL"]
        assert [a.symbol for a in dashboard.watchlist] == ["BTC"]
        assert dashboard.portfolio_summary.position_count == 3
        # Fresh buys at the live price carry no gain or loss
        assert dashboard.portfolio_summary.total_profit_loss == Decimal("0")
