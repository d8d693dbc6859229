# app/services/basket_service.py
import redis

from app.domain.errors import CrossRestaurantError, InvalidQuantityError
from app.domain.schemas import Basket, BasketItem
from app.repos.basket_repo import BasketRepo
from app.services.product_client import ProductClient
from app.services.lock_service import LockService
from app.utils.logging import get_logger

logger = get_logger(__name__)


class BasketService:
    """
    Use case'y koszyka uzytkownika.
    query (get) tylko odczyt, bez locka
    commands (add, remove, clear) - load -> mutate -> save pod lockiem uzytkownika,
    wszystkie bledy leca przed save wiec koszyk albo zapisany w calosci albo bez zmian
    """

    def __init__(
        self,
        client: redis.Redis,
        product_client: ProductClient,
        lock_service: LockService,
    ):
        self.repo = BasketRepo(client)
        self.product_client = product_client
        self.lock_service = lock_service

    #query - odczyt
    def get_basket(self, user_id: str) -> Basket:
        #brak rekordu -> pusty koszyk, nic nie zapisujemy
        return self.repo.load_or_empty(user_id)

    #commands
    def add_product(self, user_id: str, product_id: str, quantity: int) -> Basket:
        if quantity <= 0:
            raise InvalidQuantityError()

        with self.lock_service.hold(user_id) as token:
            basket = self.repo.load_or_empty(user_id)
            existing_item = basket.find_item(product_id)

            if existing_item:
                # Bez sprawdzania restauracji i bez odswiezania snapshotu z katalogu,
                # restauracja tej pozycji byla sprawdzona przy pierwszym dodaniu.
                logger.info(
                    f"Product {product_id} already in basket of user {user_id}, quantity "
                    f"{existing_item.quantity} -> {existing_item.quantity + quantity}"
                )
                existing_item.quantity += quantity
            else:
                product = self.product_client.fetch_product(product_id)

                if basket.items:
                    restaurant_id = basket.items[0].restaurant_id
                    if product.restaurant_id != restaurant_id:
                        logger.warning(
                            f"Rejected product {product_id} for user {user_id}: restaurant "
                            f"{product.restaurant_id} != {restaurant_id}"
                        )
                        raise CrossRestaurantError(restaurant_id, product.restaurant_id)

                #pozycja zawsze pod id z requestu, nawet jak katalog zwrocil inne (np. inna wielkosc liter)
                logger.info(f"Adding product {product_id} x{quantity} to basket of user {user_id}")
                basket.items.append(BasketItem.from_product(product_id, product, quantity))

            self.repo.save(user_id, basket, lock_token=token)

        return basket

    def remove_product(self, user_id: str, product_id: str, quantity: int) -> Basket:
        if quantity <= 0:
            raise InvalidQuantityError()

        with self.lock_service.hold(user_id) as token:
            if not self.repo.exists(user_id):
                return Basket(user_id=user_id, items=[])

            basket = self.repo.load(user_id)
            item = basket.find_item(product_id)

            if not item:
                #brak produktu w koszyku to nie blad
                return basket

            if item.quantity > quantity:
                logger.info(
                    f"Decreasing product {product_id} in basket of user {user_id} "
                    f"from {item.quantity} to {item.quantity - quantity}"
                )
                item.quantity -= quantity
            else:
                logger.info(f"Removing product {product_id} from basket of user {user_id}")
                basket.items.remove(item)

            self.repo.save(user_id, basket, lock_token=token)

        return basket

    def clear_basket(self, user_id: str) -> None:
        with self.lock_service.hold(user_id) as token:
            if not self.repo.exists(user_id):
                return

            basket = self.repo.load(user_id)
            basket.items.clear()
            self.repo.save(user_id, basket, lock_token=token)

        logger.info(f"Basket of user {user_id} cleared")
