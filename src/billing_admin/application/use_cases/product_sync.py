"""Remote-sync operations for products."""

from billing_admin.application.ports.billing_api import ProductsApiPort
from billing_admin.application.state.store import Store
from billing_admin.application.use_cases.entity_sync import EntitySync
from billing_admin.domain.models.records import Product


class ProductSync(EntitySync[Product]):
    """Product CRUD against the products store."""

    entity = "product"

    def __init__(
        self,
        api: ProductsApiPort,
        store: Store,
        logger=None,
        usage_logger=None,
    ) -> None:
        super().__init__(api, store, logger=logger, usage_logger=usage_logger)


__all__ = ["ProductSync"]
