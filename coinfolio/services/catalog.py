import re
from typing import Dict, Iterable, List, Optional

from coinfolio.config.logging import logger
from coinfolio.core.models import CoinInfo

# 名稱含 peg 的通常是錨定/包裝代幣，會與本尊共用代號
PEGGED_NAME = re.compile(r"peg", re.IGNORECASE)

def find_coin(catalog: List[CoinInfo], symbol: str) -> Optional[CoinInfo]:
    """
    依代號 (不分大小寫) 找出目錄中的幣種，排除錨定代幣。
    多筆符合時取目錄順序中的第一筆。
    """
    wanted = symbol.lower()
    for coin in catalog:
        if coin.symbol.lower() == wanted and not PEGGED_NAME.search(coin.name):
            return coin
    return None

def resolve_coin_ids(catalog: List[CoinInfo], symbols: Iterable[str]) -> Dict[str, CoinInfo]:
    """
    將持有的代號對應到 CoinGecko 幣種。
    找不到的代號不會出現在結果中，只記錄警告。
    """
    resolved: Dict[str, CoinInfo] = {}
    for symbol in symbols:
        coin = find_coin(catalog, symbol)
        if coin is None:
            logger.warning(f"Coin {symbol} not found in catalog. Skipping.")
            continue
        resolved[symbol] = coin
    return resolved
