import uuid
from contextlib import contextmanager

import redis
from redis.exceptions import RedisError
from tenacity import retry, stop_after_attempt, wait_fixed, retry_if_result

from app.domain.errors import BasketBusyError, StoreError
from app.repos.basket_repo import lock_key
from app.utils.settings import (
    BASKET_LOCK_TTL_MS,
    BASKET_LOCK_ATTEMPTS,
    BASKET_LOCK_WAIT_SECONDS,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
#usuwamy tylko swoj lock (token), po TTL lock mogl juz przejac inny request
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


def _not_acquired(acquired: bool) -> bool:
    return not acquired


#tenacity retry, ponawiamy tylko gdy lock zajety, bledy redisa leca od razu
def lock_retry(attempts: int, wait_seconds: float):
    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(wait_seconds),
        retry=retry_if_result(_not_acquired),
        retry_error_callback=lambda state: False,
    )


class LockService:
    """
    -blokada koszyka uzytkownika na czas cyklu load -> mutate -> save
    -zwalnianie locka
    -atomowosc przy pomocy lua
    """

    def __init__(
        self,
        client: redis.Redis,
        ttl_ms: int = BASKET_LOCK_TTL_MS,
        attempts: int = BASKET_LOCK_ATTEMPTS,
        wait_seconds: float = BASKET_LOCK_WAIT_SECONDS,
    ):
        self.redis = client
        self.ttl_ms = ttl_ms
        self._acquire = lock_retry(attempts, wait_seconds)(self._try_acquire)

    def _try_acquire(self, key: str, token: str) -> bool:
        #SET lock:basket:u1 "<token>" NX PX 5000
        return bool(self.redis.set(name=key, value=token, nx=True, px=self.ttl_ms))

    def acquire_basket_lock(self, user_id: str) -> str | None:
        key = lock_key(user_id)
        token = uuid.uuid4().hex
        try:
            acquired = self._acquire(key, token)
        except RedisError as e:
            logger.error(f"Acquire lock {key} failed: {e}")
            raise StoreError("Basket store is unavailable") from e

        if not acquired:
            logger.warning(f"Lock {key} still held by another request")
            return None

        logger.debug(f"Acquired lock {key}")
        return token

    def release_basket_lock(self, user_id: str, token: str) -> bool:
        key = lock_key(user_id)
        try:
            res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        except RedisError as e:
            #lock i tak wygasnie po TTL
            logger.warning(f"Release lock {key} failed: {e}")
            return False
        logger.debug(f"Released lock {key}")
        return bool(res)

    @contextmanager
    def hold(self, user_id: str):
        token = self.acquire_basket_lock(user_id)
        if token is None:
            raise BasketBusyError()
        try:
            yield token
        finally:
            self.release_basket_lock(user_id, token)
