import json
import os
from decimal import Decimal
from typing import Any, List

from pydantic import BaseModel, Field, ValidationError, field_validator

from coinfolio.config.logging import logger
from coinfolio.core.exceptions import ConfigurationError, TradeDataError
from coinfolio.core.models import TradeRecord, TradeType


class TradeEntry(BaseModel):
    """portfolio.json 裡的一筆紀錄 (檔案格式)。"""
    coin: str = Field(min_length=1)
    type: TradeType
    amount: Decimal = Field(gt=0)
    price: Decimal = Field(ge=0)

    @field_validator("coin", mode="before")
    @classmethod
    def _strip_coin(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("type", mode="before")
    @classmethod
    def _upper_type(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    def to_record(self) -> TradeRecord:
        return TradeRecord(
            coin_symbol=self.coin,
            type=self.type,
            amount=self.amount,
            unit_price=self.price,
        )


def parse_trades(raw: Any) -> List[TradeRecord]:
    """
    驗證已解析的 JSON 內容並轉成 TradeRecord 清單。
    任何一筆格式錯誤都會讓整批失敗。
    """
    if not isinstance(raw, list):
        raise TradeDataError("Portfolio data must be a JSON array of trades")

    records = []
    for index, item in enumerate(raw):
        try:
            records.append(TradeEntry.model_validate(item).to_record())
        except ValidationError as e:
            raise TradeDataError(f"Invalid trade at index {index}: {e}")
    return records


def load_trades(path: str) -> List[TradeRecord]:
    """從 JSON 檔讀取交易紀錄，數字一律以 Decimal 解析。"""
    if not os.path.exists(path):
        raise ConfigurationError(f"Portfolio file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            raw = json.load(f, parse_float=Decimal, parse_int=Decimal)
        except json.JSONDecodeError as e:
            raise TradeDataError(f"Invalid JSON in {path}: {e}")

    trades = parse_trades(raw)
    logger.info(f"Loaded {len(trades)} trades from {path}")
    return trades
