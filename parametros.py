"""Parametros globales del proyecto."""

from __future__ import annotations

import logging
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
STORE_JSON = DATA_DIR / "inventario.json"
APP_TITLE = "Lazy Stock"
DEFAULT_SALE_QUANTITY = 1

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
