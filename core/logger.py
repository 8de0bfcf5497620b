"""
Логи движка корзины.

Все модули пишут в логгер "shop" (или его потомков shop.cart, shop.transforms ...).
Уровень задаёт LOG_LEVEL: DEBUG показывает каждое изменение корзины,
INFO/WARNING - загрузку seed и пропущенные записи.
"""
import logging
import os
import sys

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logger = logging.getLogger("shop")
logger.setLevel(LOG_LEVEL)

# повторный импорт (перезапуск streamlit) не должен добавлять второй handler
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logger.addHandler(handler)

logger.propagate = False


def get_logger(name: str = None) -> logging.Logger:
    """shop.<name> для модуля; без имени - общий логгер shop"""
    return logging.getLogger(f"shop.{name}") if name else logger
