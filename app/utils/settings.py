# app/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

REDIS_HOST = os.getenv("REDIS_HOST", "127.0.0.1")
REDIS_PORT = int(os.getenv("REDIS_PORT", 6379))
REDIS_URL = os.getenv("REDIS_URL", f"redis://{REDIS_HOST}:{REDIS_PORT}/0")
CATALOG_SERVICE_URL = os.getenv(
    "CATALOG_SERVICE_URL",
    "http://ms-catalog.goodfood.svc.cluster.local/catalog/product",
)
CATALOG_TIMEOUT_SECONDS = float(os.getenv("CATALOG_TIMEOUT_SECONDS", 5))
#lock musi przezyc najwolniejszy cykl: connect + read timeout katalogu (requests liczy je osobno) + zapas
BASKET_LOCK_TTL_MS = int(os.getenv("BASKET_LOCK_TTL_MS", int((2 * CATALOG_TIMEOUT_SECONDS + 5) * 1000)))
BASKET_LOCK_ATTEMPTS = int(os.getenv("BASKET_LOCK_ATTEMPTS", 20))
BASKET_LOCK_WAIT_SECONDS = float(os.getenv("BASKET_LOCK_WAIT_SECONDS", 0.05))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", 8080))
