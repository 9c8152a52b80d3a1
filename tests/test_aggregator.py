import itertools
from decimal import Decimal

import pytest
from coinfolio.core.models import CoinInfo, SkipReason, TradeRecord, TradeType
from coinfolio.services.aggregator import PortfolioAggregator, group_by_symbol

def trade(symbol, kind, amount, price):
    return TradeRecord(symbol, TradeType(kind), Decimal(str(amount)), Decimal(str(price)))

ABC = CoinInfo(id="abc-coin", symbol="abc", name="ABC Token")

def test_group_by_symbol_keeps_first_seen_order():
    trades = [trade("ETH", "BUY", 1, 1), trade("BTC", "BUY", 1, 1), trade("ETH", "SELL", 1, 1)]
    groups = group_by_symbol(trades)
    assert list(groups) == ["ETH", "BTC"]
    assert len(groups["ETH"]) == 2

def test_fold_is_order_independent():
    trades = [
        trade("ABC", "BUY", 10, 100),
        trade("ABC", "BUY", 5, 120),
        trade("ABC", "SELL", 3, 150),
        trade("ABC", "SELL", 2, 90),
    ]
    expected_units = PortfolioAggregator.net_units_held(trades)
    expected_basis = PortfolioAggregator.cost_basis(trades)
    assert expected_units == Decimal("10")
    assert expected_basis == Decimal("1000") + Decimal("600") - Decimal("450") - Decimal("180")

    for perm in itertools.permutations(trades):
        assert PortfolioAggregator.net_units_held(perm) == expected_units
        assert PortfolioAggregator.cost_basis(perm) == expected_basis

def test_single_buy_at_current_price_has_zero_profit():
    lines, skipped = PortfolioAggregator.aggregate(
        {"ABC": [trade("ABC", "BUY", 4, 25)]},
        {"ABC": ABC},
        {"abc-coin": {"inr": Decimal("25")}},
        "inr",
    )
    assert skipped == []
    assert lines[0].profit == 0
    assert lines[0].profit_percent == 0

def test_end_to_end_example():
    lines, _ = PortfolioAggregator.aggregate(
        {"ABC": [trade("ABC", "BUY", 10, 100)]},
        {"ABC": ABC},
        {"abc-coin": {"inr": Decimal("150"), "usd": Decimal("2")}},
        "inr",
    )
    line = lines[0]
    assert line.name == "ABC Token"
    assert line.net_units_held == 10
    assert line.cost_basis == 1000
    assert line.current_value == 1500
    assert line.profit == 500
    assert line.profit_percent == Decimal("50")

def test_closed_position_has_no_percent():
    trades = [trade("ABC", "BUY", 2, 100), trade("ABC", "SELL", 2, 100)]
    lines, _ = PortfolioAggregator.aggregate(
        {"ABC": trades}, {"ABC": ABC}, {"abc-coin": {"inr": Decimal("300")}}, "inr"
    )
    assert lines[0].net_units_held == 0
    assert lines[0].cost_basis == 0
    assert lines[0].profit == 0
    assert lines[0].profit_percent is None

def test_unresolved_symbol_is_skipped():
    lines, skipped = PortfolioAggregator.aggregate(
        {"XYZ": [trade("XYZ", "BUY", 1, 1)], "ABC": [trade("ABC", "BUY", 1, 1)]},
        {"ABC": ABC},
        {"abc-coin": {"inr": Decimal("2")}},
        "inr",
    )
    assert [line.symbol for line in lines] == ["ABC"]
    assert skipped[0].symbol == "XYZ"
    assert skipped[0].reason is SkipReason.UNRESOLVED_SYMBOL

@pytest.mark.parametrize("prices", [{}, {"abc-coin": {"usd": Decimal("2")}}])
def test_missing_price_is_skipped(prices):
    lines, skipped = PortfolioAggregator.aggregate(
        {"ABC": [trade("ABC", "BUY", 1, 1)]}, {"ABC": ABC}, prices, "inr"
    )
    assert lines == []
    assert skipped[0].reason is SkipReason.MISSING_PRICE_QUOTE

def test_aggregate_does_not_mutate_inputs():
    groups = {"ABC": [trade("ABC", "BUY", 1, 1)]}
    coins = {"ABC": ABC}
    prices = {"abc-coin": {"inr": Decimal("2")}}
    PortfolioAggregator.aggregate(groups, coins, prices, "inr")
    assert groups == {"ABC": [trade("ABC", "BUY", 1, 1)]}
    assert coins == {"ABC": ABC}
    assert prices == {"abc-coin": {"inr": Decimal("2")}}
