import logging
import sys
from typing import Optional, TextIO

# settings 載入失敗時使用預設值
try:
    from coinfolio.config.settings import settings
    LOG_LEVEL = settings.LOG_LEVEL if settings else "INFO"
except Exception:
    LOG_LEVEL = "INFO"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def resolve_level(name: str) -> int:
    """把 "debug"、"WARNING" 之類的名稱轉成 logging 等級，無法辨識時用 INFO。"""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO

def setup_logging(name: str = "coinfolio", level: Optional[str] = None, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    建立專案 Logger。
    日誌一律寫到 stderr，stdout 只留給報表本身 (通知、表格、總結)，
    這樣報表可以直接導向檔案而不混入日誌。
    """
    logger = logging.getLogger(name)

    # 防止重複添加 Handler
    if logger.handlers:
        return logger

    # 報表輸出靠 print，不讓日誌往 root logger 傳
    logger.propagate = False

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)

    set_log_level(logger, level or LOG_LEVEL)
    return logger

def set_log_level(logger: logging.Logger, level: str) -> None:
    """CLI 的 --log-level 會覆蓋 LOG_LEVEL。"""
    resolved = resolve_level(level)
    logger.setLevel(resolved)
    for handler in logger.handlers:
        handler.setLevel(resolved)

# 預設 Logger
logger = setup_logging()
