from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import List, Optional

from colorama import Fore, Style
from tabulate import tabulate

from coinfolio.core.models import PortfolioLine, SkippedCoin, SkipReason

CURRENCY_SIGNS = {"inr": "₹", "usd": "$", "eur": "€", "gbp": "£", "jpy": "¥"}
CENT = Decimal("0.01")

def round2(value: Decimal) -> Decimal:
    with localcontext() as ctx:
        # 整數位數 + 兩位小數，超過預設 28 位時放寬精度
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
    # -0.00 顯示為 0.00
    return rounded.copy_abs() if rounded.is_zero() else rounded

def currency_sign(currency: str) -> str:
    return CURRENCY_SIGNS.get(currency.lower(), currency.upper())

class ReportFormatter:
    @staticmethod
    def sort_lines(lines: List[PortfolioLine]) -> List[PortfolioLine]:
        """
        依獲利百分比由高到低排序 (穩定排序)。
        無法計算百分比的項目排在最後，維持原本的相對順序。
        """
        ranked = [line for line in lines if line.profit_percent is not None]
        unranked = [line for line in lines if line.profit_percent is None]
        return sorted(ranked, key=lambda line: line.profit_percent, reverse=True) + unranked

    @staticmethod
    def _colorize(text: str, positive: bool, use_color: bool) -> str:
        if not use_color:
            return text
        color = Fore.GREEN if positive else Fore.RED
        return f"{color}{text}{Style.RESET_ALL}"

    @staticmethod
    def format_signed(value: Decimal, suffix: str = "", use_color: bool = True) -> str:
        """帶箭頭的兩位小數，0 視為非負。"""
        rounded = round2(value)
        positive = rounded >= 0
        arrow = "↑" if positive else "↓"
        return ReportFormatter._colorize(f"{arrow} {rounded}{suffix}", positive, use_color)

    @staticmethod
    def format_percent(value: Optional[Decimal], use_color: bool = True) -> str:
        if value is None:
            return "N/A"
        return ReportFormatter.format_signed(value, "%", use_color)

    @staticmethod
    def format_table(lines: List[PortfolioLine], currency: str, use_color: bool = True) -> str:
        if not lines:
            return "No holdings to report."

        code = currency.upper()
        headers = [
            "COIN",
            "NAME",
            f"INITIAL HOLDING ({code})",
            f"CURRENT HOLDING ({code})",
            f"PROFIT ({code})",
            "PROFIT %",
        ]
        rows = [
            [
                line.symbol,
                line.name,
                str(round2(line.cost_basis)),
                str(round2(line.current_value)),
                ReportFormatter.format_signed(line.profit, use_color=use_color),
                ReportFormatter.format_percent(line.profit_percent, use_color),
            ]
            for line in lines
        ]
        # 數字已格式化為字串，避免 tabulate 重新解析
        return tabulate(rows, headers=headers, tablefmt="grid", disable_numparse=True)

    @staticmethod
    def format_summary(total_profit: Decimal, currency: str, use_color: bool = True) -> str:
        rounded = round2(total_profit)
        positive = rounded >= 0
        arrow = "↑" if positive else "↓"
        text = ReportFormatter._colorize(f"{arrow} {currency_sign(currency)} {rounded}", positive, use_color)
        return f"Net Profit/Loss - {text}"

    @staticmethod
    def format_skipped(skipped: List[SkippedCoin], use_color: bool = True) -> str:
        messages = []
        for item in skipped:
            if item.reason is SkipReason.UNRESOLVED_SYMBOL:
                message = f"Coin {item.symbol} not found"
            else:
                message = f"Coin price for {item.symbol} not found"
            messages.append(ReportFormatter._colorize(message, False, use_color))
        return "\n".join(messages)
