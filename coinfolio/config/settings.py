import sys
from typing import List

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    應用程式全域設定。
    自動從環境變數 (.env) 讀取並驗證型別。
    """
    # CoinGecko 設定
    COINGECKO_BASE_URL: str = "https://api.coingecko.com/api/v3"
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # 報價幣別 (逗號分隔，第一個以外的用於參考)
    VS_CURRENCIES: str = "inr,usd"
    REPORT_CURRENCY: str = "inr"

    # 交易紀錄檔案
    PORTFOLIO_FILE: str = "data/portfolio.json"

    # 應用程式行為
    LOG_LEVEL: str = "INFO"
    COLOR_OUTPUT: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @field_validator("VS_CURRENCIES", "REPORT_CURRENCY")
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return value.strip().lower()

    @model_validator(mode="after")
    def _report_currency_is_quoted(self) -> "Settings":
        if self.REPORT_CURRENCY not in self.vs_currencies:
            raise ValueError(
                f"REPORT_CURRENCY {self.REPORT_CURRENCY!r} must be one of VS_CURRENCIES ({self.VS_CURRENCIES})"
            )
        return self

    @property
    def vs_currencies(self) -> List[str]:
        return [c.strip() for c in self.VS_CURRENCIES.split(",") if c.strip()]


# Singleton Instance
try:
    settings = Settings()
except Exception as e:
    # logging 依賴 settings，這裡只能直接印到 stderr
    print(f"CRITICAL: Failed to load configuration. Invalid env vars? {e}", file=sys.stderr)
    settings = None
