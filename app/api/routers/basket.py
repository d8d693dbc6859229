# app/api/routers/basket.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from app.api.deps import get_service, get_user_id
from app.domain.errors import ForbiddenError
from app.domain.schemas import Basket, ItemIn
from app.services.basket_service import BasketService

router = APIRouter(prefix="/basket", tags=["basket"])


#kazda sciezka tez ze slashem na koncu, jak w starym serwisie
@router.get("", response_model=Basket)
@router.get("/", response_model=Basket, include_in_schema=False)
def get_basket(
    user_id: str = Depends(get_user_id),
    svc: BasketService = Depends(get_service),
):
    return svc.get_basket(user_id)


@router.post("", response_model=Basket)
@router.post("/", response_model=Basket, include_in_schema=False)
def add_item(
    payload: ItemIn,
    user_id: str = Depends(get_user_id),
    svc: BasketService = Depends(get_service),
):
    return svc.add_product(user_id, payload.id, payload.quantity)


@router.delete("", response_model=Basket)
@router.delete("/", response_model=Basket, include_in_schema=False)
def remove_item(
    payload: ItemIn,
    user_id: str = Depends(get_user_id),
    svc: BasketService = Depends(get_service),
):
    return svc.remove_product(user_id, payload.id, payload.quantity)


@router.delete("/clear", response_class=PlainTextResponse)
@router.delete("/clear/", response_class=PlainTextResponse, include_in_schema=False)
def clear_basket(
    user_id: str = Depends(get_user_id),
    svc: BasketService = Depends(get_service),
):
    svc.clear_basket(user_id)
    return "Basket cleared"


@router.get("/{owner_id}", response_model=Basket)
def get_user_basket(
    owner_id: str,
    user_id: str = Depends(get_user_id),
    svc: BasketService = Depends(get_service),
):
    #"clear" to sciezka DELETE, nie id uzytkownika
    if owner_id == "clear":
        raise HTTPException(status_code=405, detail="Method Not Allowed", headers={"Allow": "DELETE"})
    if owner_id != user_id:
        raise ForbiddenError()
    return svc.get_basket(owner_id)
