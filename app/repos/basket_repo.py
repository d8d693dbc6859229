# app/repos/basket_repo.py
import redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from app.domain.errors import BasketBusyError, StoreError
from app.domain.schemas import Basket
from app.utils.logging import get_logger

logger = get_logger(__name__)


def basket_key(user_id: str) -> str:
    return f"basket:{user_id}"


def lock_key(user_id: str) -> str:
    return f"lock:basket:{user_id}"


#LUA zapis tylko gdy lock dalej nalezy do nas, GET + porownanie + SET atomowo
_SAVE_IF_LOCKED_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    redis.call('SET', KEYS[2], ARGV[2])
    return 1
else
    return 0
end
"""


class BasketRepo:
    """
    Adapter koszyka na redisie.
    Caly koszyk to jeden dokument JSON pod kluczem basket:<user_id>,
    kazdy zapis nadpisuje caly rekord (brak update pojedynczych pol).
    """

    def __init__(self, client: redis.Redis):
        self.redis = client

    def exists(self, user_id: str) -> bool:
        try:
            return bool(self.redis.exists(basket_key(user_id)))
        except RedisError as e:
            logger.error(f"EXISTS {basket_key(user_id)} failed: {e}")
            raise StoreError("Basket store is unavailable") from e

    def load(self, user_id: str) -> Basket:
        key = basket_key(user_id)
        try:
            payload = self.redis.get(key)
        except RedisError as e:
            logger.error(f"GET {key} failed: {e}")
            raise StoreError("Basket store is unavailable") from e

        if payload is None:
            raise StoreError(f"Basket for user {user_id} does not exist")

        try:
            return Basket.model_validate_json(payload)
        except ValidationError as e:
            #uszkodzony / niekompatybilny rekord, nie naprawiamy go automatycznie
            logger.error(f"Cannot decode basket stored under {key}: {e}")
            raise StoreError("Stored basket cannot be decoded") from e

    def load_or_empty(self, user_id: str) -> Basket:
        if not self.exists(user_id):
            return Basket(user_id=user_id, items=[])
        return self.load(user_id)

    def save(self, user_id: str, basket: Basket, lock_token: str | None = None) -> None:
        """
        Zapis calego koszyka.
        Z lock_token zapis przechodzi tylko gdy lock:basket:<user_id> dalej ma ten token,
        jak lock wygasl (i moze go miec inny request) leci BasketBusyError i nic nie zapisujemy.
        """
        key = basket_key(user_id)
        payload = basket.model_dump_json(by_alias=True)
        try:
            if lock_token is None:
                self.redis.set(key, payload)
                return
            saved = self.redis.eval(_SAVE_IF_LOCKED_LUA, 2, lock_key(user_id), key, lock_token, payload)
        except RedisError as e:
            logger.error(f"SET {key} failed: {e}")
            raise StoreError("Basket could not be saved") from e

        if not saved:
            logger.warning(f"Lock {lock_key(user_id)} lost before saving {key}, basket not saved")
            raise BasketBusyError()
