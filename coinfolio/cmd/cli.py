import argparse
import sys
from typing import List, Optional

import requests
from colorama import just_fix_windows_console

from coinfolio.config.settings import settings
from coinfolio.config.logging import logger, set_log_level
from coinfolio.core.exceptions import AppError, ConfigurationError
from coinfolio.infrastructure.coingecko.client import CoinGeckoClient
from coinfolio.infrastructure.portfolio_file import load_trades
from coinfolio.services.portfolio import PortfolioService

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Crypto portfolio profit/loss report")
    parser.add_argument("--file", help="Path to the trades JSON file (default: PORTFOLIO_FILE)")
    parser.add_argument("--currency", help="Currency used for valuation (default: REPORT_CURRENCY)")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--log-level", help="Logging level written to stderr (default: LOG_LEVEL)")
    return parser

def run_report(path: str, currency: str, use_color: bool, session: requests.Session) -> None:
    """讀取交易紀錄、計算損益並印出報表。"""
    if currency not in settings.vs_currencies:
        raise ConfigurationError(
            f"Currency {currency!r} is not quoted. Choose one of: {', '.join(settings.vs_currencies)}"
        )

    trades = load_trades(path)
    client = CoinGeckoClient(
        session,
        base_url=settings.COINGECKO_BASE_URL,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
    )
    service = PortfolioService(client, settings.vs_currencies, currency)
    report = service.build_report(trades)
    print(PortfolioService.render(report, use_color))

def main(argv: Optional[List[str]] = None) -> int:
    if not settings:
        logger.critical("Critical: Configuration could not be loaded. Exiting.")
        return 1

    args = build_parser().parse_args(argv)
    if args.log_level:
        set_log_level(logger, args.log_level)
    path = args.file or settings.PORTFOLIO_FILE
    currency = (args.currency or settings.REPORT_CURRENCY).lower()
    use_color = settings.COLOR_OUTPUT and not args.no_color
    if use_color:
        just_fix_windows_console()

    try:
        with requests.Session() as session:
            run_report(path, currency, use_color, session)
    except AppError as e:
        logger.error(f"Portfolio report failed: {e}")
        return 1
    except Exception as e:
        logger.critical(f"An unexpected error occurred: {e}", exc_info=True)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
