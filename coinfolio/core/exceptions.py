class AppError(Exception):
    """所有應用程式自定義錯誤的基類"""
    pass

class ConfigurationError(AppError):
    """設定錯誤 (如環境變數不合法、找不到交易紀錄檔)"""
    pass

class TradeDataError(AppError):
    """交易紀錄格式錯誤 (如未知的交易方向、數量不是數字)"""
    pass

class DataSourceError(AppError):
    """資料來源錯誤 (如 CoinGecko API 連線失敗或回傳格式不符)"""
    pass
