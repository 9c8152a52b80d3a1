from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, RootModel, ValidationError

from coinfolio.core.exceptions import DataSourceError
from coinfolio.core.models import CoinInfo, PriceQuote


class CoinListEntry(BaseModel):
    id: str
    symbol: str
    name: str


class CoinListResponse(RootModel[List[CoinListEntry]]):
    pass


class SimplePriceResponse(RootModel[Dict[str, Dict[str, Optional[float]]]]):
    pass


class CoinGeckoMapper:
    """
    負責驗證 CoinGecko API 的原始 JSON，並轉換為核心 Domain Models。
    格式不符時直接拋出 DataSourceError。
    """

    @staticmethod
    def to_coin_list(raw: Any) -> List[CoinInfo]:
        try:
            entries = CoinListResponse.model_validate(raw).root
        except ValidationError as e:
            raise DataSourceError(f"Unexpected /coins/list response: {e}")
        return [CoinInfo(id=c.id, symbol=c.symbol, name=c.name) for c in entries]

    @staticmethod
    def to_price_quote(raw: Any) -> PriceQuote:
        """
        將 /simple/price 回傳轉為 PriceQuote。
        價格透過 str() 轉為 Decimal，null 的幣別直接略過。
        """
        try:
            quotes = SimplePriceResponse.model_validate(raw).root
        except ValidationError as e:
            raise DataSourceError(f"Unexpected /simple/price response: {e}")
        return {
            coin_id: {
                currency: Decimal(str(price))
                for currency, price in prices.items()
                if price is not None
            }
            for coin_id, prices in quotes.items()
        }
