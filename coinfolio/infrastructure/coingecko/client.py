from typing import Any, Dict, Iterable, List, Optional

import requests

from coinfolio.config.logging import logger
from coinfolio.core.exceptions import DataSourceError
from coinfolio.core.models import CoinInfo, PriceQuote
from .mapper import CoinGeckoMapper

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"

class CoinGeckoClient:
    """
    CoinGecko 公開 API 客戶端。
    負責發送請求與錯誤處理，並將資料交給 Mapper 轉換。
    不做重試，任何失敗都視為致命錯誤。
    """

    def __init__(self, session: requests.Session, base_url: str = DEFAULT_BASE_URL, timeout: float = 10):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"CoinGecko Connection Error: {e}")
            raise DataSourceError(f"Failed to fetch {endpoint} from CoinGecko: {e}")
        except ValueError as e:
            # 回傳內容不是 JSON
            raise DataSourceError(f"Invalid JSON from CoinGecko {endpoint}: {e}")

    def fetch_coins_list(self) -> List[CoinInfo]:
        """獲取所有支援的幣種目錄"""
        raw_data = self._request("/coins/list")
        coins = CoinGeckoMapper.to_coin_list(raw_data)
        logger.info(f"Fetched {len(coins)} coins from CoinGecko catalog")
        return coins

    def fetch_prices(self, coin_ids: Iterable[str], vs_currencies: Iterable[str]) -> PriceQuote:
        """
        一次請求取得所有幣種的現價。
        沒有任何 id 時不發送請求。
        """
        ids = list(dict.fromkeys(coin_ids))
        if not ids:
            logger.info("No coin ids to price. Skipping price request.")
            return {}

        params = {
            "ids": ",".join(ids),
            "vs_currencies": ",".join(vs_currencies),
        }
        raw_data = self._request("/simple/price", params)
        return CoinGeckoMapper.to_price_quote(raw_data)
