# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List


class ItemIn(BaseModel):
    """Schema dla dodawania / usuwania produktu z koszyka."""

    id: str = Field(..., min_length=1, description="ID produktu z katalogu")
    quantity: int = Field(..., gt=0, description="Ilosc produktu (musi byc > 0)")


class ProductSnapshot(BaseModel):
    """Produkt zwracany przez serwis katalogu (tylko odczyt)."""

    id: str
    label: str
    description: str
    price: float
    visible: bool = True
    quantity: int | None = None
    category_id: str = Field(..., alias="categoryId")
    restaurant_id: str = Field(..., alias="restaurantId")

    model_config = ConfigDict(populate_by_name=True)


class BasketItem(BaseModel):
    """Pozycja koszyka, snapshot produktu z momentu pierwszego dodania."""

    id: str
    quantity: int = Field(..., gt=0)
    label: str
    description: str
    price: float
    category_id: str = Field(..., alias="categoryId")
    restaurant_id: str = Field(..., alias="restaurantId")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_product(cls, product_id: str, product: ProductSnapshot, quantity: int) -> "BasketItem":
        return cls(
            id=product_id,
            quantity=quantity,
            label=product.label,
            description=product.description,
            price=product.price,
            category_id=product.category_id,
            restaurant_id=product.restaurant_id,
        )


class Basket(BaseModel):
    """Schema dla koszyka (rekord w redisie i response)."""

    user_id: str
    items: List[BasketItem] = Field(default_factory=list)

    def find_item(self, product_id: str) -> BasketItem | None:
        for item in self.items:
            if item.id == product_id:
                return item
        return None


class ErrorOut(BaseModel):
    error: str
    message: str
