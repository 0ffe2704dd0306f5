import logging.config
import os

# 日期输入格式 (DD/MM/YYYY)
DATE_FORMAT = "%d/%m/%Y"

# 货币符号
CURRENCY_SYMBOL = "₹"

# 金额精度
AMOUNT_PRECISION = 2
APY_PRECISION = 4

# 输入上限
MAX_INSTALMENT_COUNT = 600
MAX_DEPOSIT_MONTHS = 1200
MAX_ANNUAL_RATE = 100.0

# 日志
LOG_LEVEL = os.environ.get("BANKCALC_LOG_LEVEL", "WARNING").upper()

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "stream": "ext://sys.stderr",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
}


def setup_logging(level: str = None):
    """应用日志配置，level 覆盖默认级别"""
    config = dict(LOGGING_CONFIG)
    config["root"] = dict(LOGGING_CONFIG["root"])
    if level:
        config["root"]["level"] = level.upper()
    logging.config.dictConfig(config)
