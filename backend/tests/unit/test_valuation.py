"""
Unit Tests - Portfolio Valuation
Tests for the pure mark-to-market and aggregation functions.
"""
from decimal import Decimal

from cryptoledger.core.portfolio.valuation import (
    PortfolioSummary,
    aggregate,
    value_position,
)


class TestValuePosition:
    """Tests for value_position."""

    def test_gain(self):
        valuation = value_position(Decimal("0.5"), Decimal("40000"), Decimal("43250.80"), asset_symbol="BTC")

        assert valuation.asset_symbol == "BTC"
        assert valuation.current_value == Decimal("21625.40")
        assert valuation.invested == Decimal("20000.00")
        assert valuation.profit_loss == Decimal("1625.40")
        assert valuation.profit_loss_percentage == Decimal("8.1270")

    def test_loss(self):
        valuation = value_position(Decimal("2"), Decimal("3000"), Decimal("2650.45"))

        assert valuation.current_value == Decimal("5300.90")
        assert valuation.profit_loss == Decimal("-699.10")
        assert valuation.profit_loss_percentage == Decimal("-11.6517")

    def test_zero_cost_basis_gives_zero_percentage(self):
        valuation = value_position(Decimal("1"), Decimal("0"), Decimal("100"))

        assert valuation.profit_loss == Decimal("100.00")
        assert valuation.profit_loss_percentage == Decimal("0")

    def test_rounding_residue_is_not_negative_zero(self):
        # 0.3 * 33333.33333333 vs the same basis: tiny residue rounds to zero
        valuation = value_position(Decimal("0.3"), Decimal("33333.33333334"), Decimal("33333.33333333"))

        assert valuation.profit_loss == Decimal("0")
        assert str(valuation.profit_loss) == "0.00"


class TestAggregate:
    """Tests for aggregate."""

    def test_empty_portfolio(self):
        summary = aggregate([])

        assert summary == PortfolioSummary()
        assert summary.total_value == Decimal("0")
        assert summary.top_performing_asset is None
        assert summary.worst_performing_asset is None

    def test_totals(self):
        summary = aggregate([
            value_position(Decimal("0.5"), Decimal("40000"), Decimal("43250.80"), asset_symbol="BTC"),
            value_position(Decimal("2"), Decimal("3000"), Decimal("2650.45"), asset_symbol="ETH"),
        ])

        assert summary.position_count == 2
        assert summary.total_value == Decimal("26926.30")
        assert summary.total_profit_loss == Decimal("926.30")
        assert summary.total_investment == Decimal("26000.00")
        assert summary.total_profit_loss_percentage == Decimal("3.56")
        assert summary.top_performing_asset == "BTC"
        assert summary.worst_performing_asset == "ETH"

    def test_ranking_is_by_percentage_not_absolute_gain(self):
        summary = aggregate([
            value_position(Decimal("10"), Decimal("1000"), Decimal("1100"), asset_symbol="BIG"),    # +10%, +1000
            value_position(Decimal("1"), Decimal("100"), Decimal("150"), asset_symbol="SMALL"),     # +50%, +50
        ])

        assert summary.top_performing_asset == "SMALL"
        assert summary.worst_performing_asset == "BIG"

    def test_ties_keep_input_order(self):
        summary = aggregate([
            value_position(Decimal("1"), Decimal("100"), Decimal("110"), asset_symbol="AAA"),
            value_position(Decimal("2"), Decimal("100"), Decimal("110"), asset_symbol="BBB"),
            value_position(Decimal("3"), Decimal("100"), Decimal("110"), asset_symbol="CCC"),
        ])

        assert summary.top_performing_asset == "AAA"
        assert summary.worst_performing_asset == "CCC"

    def test_single_position_is_both_best_and_worst(self):
        summary = aggregate([value_position(Decimal("1"), Decimal("10"), Decimal("5"), asset_symbol="SOL")])

        assert summary.top_performing_asset == "SOL"
        assert summary.worst_performing_asset == "SOL"
        assert summary.total_profit_loss_percentage == Decimal("-50.00")

    def test_zero_investment_gives_zero_percentage(self):
        summary = aggregate([value_position(Decimal("1"), Decimal("0"), Decimal("0"), asset_symbol="DUST")])

        assert summary.total_investment == Decimal("0")
        assert summary.total_profit_loss_percentage == Decimal("0")
