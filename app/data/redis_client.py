# app/data/redis_client.py
import redis

from app.utils.settings import REDIS_URL


def create_redis(url: str | None = None) -> redis.Redis:
    #klient nie laczy sie od razu, pierwsze polaczenie przy pierwszej komendzie
    return redis.Redis.from_url(
        url or REDIS_URL,
        decode_responses=True,
    )
