# app/api/routers/health.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from app.api.deps import get_redis
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health(client=Depends(get_redis)):
    try:
        client.ping()
    except RedisError as e:
        logger.warning(f"Health check: redis unavailable: {e}")
        return JSONResponse(status_code=503, content={"status": "degraded", "redis": "error"})
    return {"status": "ok", "redis": "ok"}
