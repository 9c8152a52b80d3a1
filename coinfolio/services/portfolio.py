from typing import Iterable, List

from coinfolio.config.logging import logger
from coinfolio.core.models import PortfolioReport, TradeRecord
from coinfolio.infrastructure.coingecko.client import CoinGeckoClient
from coinfolio.services.aggregator import PortfolioAggregator, group_by_symbol
from coinfolio.services.catalog import resolve_coin_ids
from coinfolio.services.report_formatter import ReportFormatter

class PortfolioService:
    """
    負責協調整個損益計算流程：
    幣種目錄 -> 現價 -> 彙總 -> 排序。
    所有依賴由外部傳入，方便測試時替換。
    """
    def __init__(self, source: CoinGeckoClient, vs_currencies: Iterable[str], report_currency: str):
        self.source = source
        self.vs_currencies = list(vs_currencies)
        self.report_currency = report_currency.lower()

    def build_report(self, trades: List[TradeRecord]) -> PortfolioReport:
        """執行一次完整的計算，網路錯誤會直接往外拋。"""
        trades_by_symbol = group_by_symbol(trades)
        logger.info(f"Computing portfolio for {len(trades_by_symbol)} coins: {', '.join(trades_by_symbol)}")

        # 1. 代號 -> CoinGecko id
        catalog = self.source.fetch_coins_list()
        coins = resolve_coin_ids(catalog, trades_by_symbol.keys())

        # 2. 一次取得所有現價
        prices = self.source.fetch_prices(
            (coin.id for coin in coins.values()),
            self.vs_currencies,
        )

        # 3. 彙總並排序
        lines, skipped = PortfolioAggregator.aggregate(
            trades_by_symbol, coins, prices, self.report_currency
        )
        report = PortfolioReport(
            currency=self.report_currency,
            lines=ReportFormatter.sort_lines(lines),
            skipped=skipped,
        )
        logger.info(f"Portfolio computed: {len(report.lines)} coins reported, {len(report.skipped)} skipped")
        return report

    @staticmethod
    def render(report: PortfolioReport, use_color: bool = True) -> str:
        parts = []
        if report.skipped:
            parts.append(ReportFormatter.format_skipped(report.skipped, use_color))
        parts.append(ReportFormatter.format_table(report.lines, report.currency, use_color))
        parts.append(ReportFormatter.format_summary(report.total_profit, report.currency, use_color))
        return "\n".join(parts)
