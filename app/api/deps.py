# app/api/deps.py
from fastapi import Depends, Header, Request

from app.domain.errors import UnauthorizedError
from app.services.basket_service import BasketService
from app.services.lock_service import LockService


def get_user_id(user_id: str | None = Header(default=None, alias="UserID")) -> str:
    #tozsamosc nie jest weryfikowana, tylko wymagana
    if user_id is None or not user_id.strip():
        raise UnauthorizedError()
    return user_id


def get_redis(request: Request):
    return request.app.state.redis


def get_product_client(request: Request):
    return request.app.state.product_client


def get_service(
    client=Depends(get_redis),
    product_client=Depends(get_product_client),
) -> BasketService:
    return BasketService(
        client=client,
        product_client=product_client,
        lock_service=LockService(client),
    )
