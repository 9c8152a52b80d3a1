from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from coinfolio.config.logging import logger
from coinfolio.core.models import (
    CoinInfo,
    PortfolioLine,
    PriceQuote,
    SkippedCoin,
    SkipReason,
    TradeRecord,
    TradeType,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

def group_by_symbol(trades: Iterable[TradeRecord]) -> Dict[str, List[TradeRecord]]:
    """依代號分組，保留代號第一次出現的順序。"""
    groups: Dict[str, List[TradeRecord]] = {}
    for trade in trades:
        groups.setdefault(trade.coin_symbol, []).append(trade)
    return groups

class PortfolioAggregator:
    @staticmethod
    def net_units_held(trades: Iterable[TradeRecord]) -> Decimal:
        return sum(
            (t.amount if t.type is TradeType.BUY else -t.amount for t in trades),
            ZERO,
        )

    @staticmethod
    def cost_basis(trades: Iterable[TradeRecord]) -> Decimal:
        """買入名目價值減去賣出名目價值 (淨投入)。"""
        return sum(
            (t.notional if t.type is TradeType.BUY else -t.notional for t in trades),
            ZERO,
        )

    @staticmethod
    def profit_percent(profit: Decimal, cost_basis: Decimal) -> Optional[Decimal]:
        # 已全部平倉時 cost_basis 為 0，百分比沒有意義
        if cost_basis == 0:
            return None
        return profit / cost_basis * HUNDRED

    @staticmethod
    def build_line(symbol: str, coin: CoinInfo, trades: List[TradeRecord], unit_price: Decimal) -> PortfolioLine:
        net_units = PortfolioAggregator.net_units_held(trades)
        basis = PortfolioAggregator.cost_basis(trades)
        current_value = net_units * unit_price
        profit = current_value - basis
        return PortfolioLine(
            symbol=symbol,
            name=coin.name,
            coin_id=coin.id,
            net_units_held=net_units,
            cost_basis=basis,
            current_value=current_value,
            profit=profit,
            profit_percent=PortfolioAggregator.profit_percent(profit, basis),
        )

    @staticmethod
    def aggregate(
        trades_by_symbol: Dict[str, List[TradeRecord]],
        coins: Dict[str, CoinInfo],
        prices: PriceQuote,
        currency: str,
    ) -> Tuple[List[PortfolioLine], List[SkippedCoin]]:
        """
        每個代號產生一筆 PortfolioLine。
        找不到幣種或現價的代號會被略過並記錄原因，不中斷整批計算。
        """
        lines: List[PortfolioLine] = []
        skipped: List[SkippedCoin] = []

        for symbol, trades in trades_by_symbol.items():
            coin = coins.get(symbol)
            if coin is None:
                skipped.append(SkippedCoin(symbol, SkipReason.UNRESOLVED_SYMBOL))
                continue

            unit_price = prices.get(coin.id, {}).get(currency)
            if unit_price is None:
                logger.warning(f"Coin price for {symbol} ({coin.id}) not found in {currency}. Skipping.")
                skipped.append(SkippedCoin(symbol, SkipReason.MISSING_PRICE_QUOTE))
                continue

            lines.append(PortfolioAggregator.build_line(symbol, coin, trades, unit_price))

        return lines, skipped
