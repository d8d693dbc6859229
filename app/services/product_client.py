# app/services/product_client.py
import requests
from requests import RequestException
from requests.utils import quote

from app.domain.errors import ProductNotFoundError
from app.domain.schemas import ProductSnapshot
from app.utils.settings import CATALOG_SERVICE_URL, CATALOG_TIMEOUT_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)


class ProductClient:
    """
    Klient serwisu katalogu.
    Bez retry - kazdy blad transportu / dekodowania to od razu PRODUCT_NOT_FOUND.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = CATALOG_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    def fetch_product(self, product_id: str) -> ProductSnapshot:
        url = f"{self.base_url}/{quote(product_id, safe='')}"
        logger.info(f"ProductClient GET {url}")

        try:
            resp = self.http.get(url, timeout=self.timeout)
            resp.raise_for_status()
            return ProductSnapshot.model_validate(resp.json())
        except (RequestException, ValueError) as e:
            #ValueError - zly JSON albo ValidationError z pydantic
            logger.warning(f"Product {product_id} lookup failed: {e}")
            raise ProductNotFoundError(product_id) from e
