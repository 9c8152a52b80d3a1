from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

class TradeType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"

class SkipReason(str, Enum):
    UNRESOLVED_SYMBOL = "unresolved_symbol"
    MISSING_PRICE_QUOTE = "missing_price_quote"

@dataclass(frozen=True)
class TradeRecord:
    """
    核心交易模型 (Domain Model)。
    代表一筆使用者自行記錄的現貨買賣。
    此模型獨立於檔案格式與任何交易所 API。
    """
    coin_symbol: str       # 使用者持有的代號 (e.g., "BTC")
    type: TradeType        # 方向 (BUY / SELL)
    amount: Decimal        # 數量
    unit_price: Decimal    # 成交單價 (報表幣別)

    @property
    def notional(self) -> Decimal:
        return self.amount * self.unit_price

@dataclass(frozen=True)
class CoinInfo:
    """CoinGecko 幣種目錄中的一筆資料。"""
    id: str                # CoinGecko 的唯一識別碼 (e.g., "bitcoin")
    symbol: str
    name: str

# coin id -> {幣別 -> 現價}
PriceQuote = Dict[str, Dict[str, Decimal]]

@dataclass(frozen=True)
class PortfolioLine:
    """
    單一幣種的損益結果。
    cost_basis 是買賣名目價值的淨額，不是平均成本。
    """
    symbol: str
    name: str
    coin_id: str
    net_units_held: Decimal
    cost_basis: Decimal
    current_value: Decimal
    profit: Decimal
    # cost_basis 為 0 (已全部平倉) 時無法計算百分比
    profit_percent: Optional[Decimal]

@dataclass(frozen=True)
class SkippedCoin:
    symbol: str
    reason: SkipReason

@dataclass(frozen=True)
class PortfolioReport:
    """一次執行的完整結果 (已排序)。"""
    currency: str
    lines: List[PortfolioLine] = field(default_factory=list)
    skipped: List[SkippedCoin] = field(default_factory=list)

    @property
    def total_profit(self) -> Decimal:
        return sum((line.profit for line in self.lines), Decimal("0"))
