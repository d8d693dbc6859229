# app/main.py
import time

import redis
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.routers import basket, health
from app.data.redis_client import create_redis
from app.domain.errors import BasketError
from app.domain.schemas import ErrorOut
from app.services.product_client import ProductClient
from app.utils.settings import PORT
from app.utils.logging import get_logger

logger = get_logger(__name__)
access_logger = get_logger("app.access")


async def basket_error_handler(request: Request, exc: BasketError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.code} {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorOut(error=exc.code, message=exc.message).model_dump(),
    )


async def access_log(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    access_logger.info(
        f'"{request.method} {request.url.path}" {response.status_code} {elapsed_ms:.1f}ms'
    )
    return response


def create_app(
    redis_client: redis.Redis | None = None,
    product_client: ProductClient | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Basket Service",
        version="1.0.0",
    )

    #klienci wstrzykiwani przez app.state, testy podmieniaja je na fake
    app.state.redis = redis_client if redis_client is not None else create_redis()
    app.state.product_client = product_client if product_client is not None else ProductClient()

    app.add_exception_handler(BasketError, basket_error_handler)
    app.middleware("http")(access_log)

    # Include routers
    app.include_router(health.router)
    app.include_router(basket.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
