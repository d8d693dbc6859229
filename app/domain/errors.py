# app/domain/errors.py


class BasketError(Exception):
    """
    Bazowy blad domeny koszyka.
    code - maszynowy rodzaj bledu (pole "error" w odpowiedzi)
    status_code - kod HTTP zwracany przez API
    """

    code = "BASKET_ERROR"
    status_code = 400
    default_message = "Basket operation failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(BasketError):
    code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class ForbiddenError(BasketError):
    code = "FORBIDDEN"
    status_code = 403
    default_message = "Access to this basket is not allowed"


class ProductNotFoundError(BasketError):
    code = "PRODUCT_NOT_FOUND"
    default_message = "Product not found"

    def __init__(self, product_id: str, message: str | None = None):
        self.product_id = product_id
        super().__init__(message)


class CrossRestaurantError(BasketError):
    code = "NOT_SAME_RESTAURANT"
    default_message = "All items in the basket must be from the same restaurant"

    def __init__(self, expected: str, got: str):
        self.expected = expected
        self.got = got
        super().__init__()


class BasketBusyError(BasketError):
    code = "BASKET_BUSY"
    status_code = 409
    default_message = "Basket is being modified by another request, try again"


class StoreError(BasketError):
    code = "STORE_ERROR"
    status_code = 500
    default_message = "Basket store failure"


class InvalidQuantityError(BasketError):
    code = "INVALID_QUANTITY"
    default_message = "Quantity must be greater than 0"
