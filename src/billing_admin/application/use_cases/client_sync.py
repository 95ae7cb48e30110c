"""Remote-sync operations for clients."""

from billing_admin.application.ports.billing_api import ClientsApiPort
from billing_admin.application.state.store import Store
from billing_admin.application.use_cases.entity_sync import EntitySync
from billing_admin.domain.models.records import Client, Invoice, Payment


class ClientSync(EntitySync[Client]):
    """Client operations: CRUD, search, status and related records."""

    entity = "client"

    def __init__(
        self,
        api: ClientsApiPort,
        store: Store,
        logger=None,
        usage_logger=None,
    ) -> None:
        super().__init__(api, store, logger=logger, usage_logger=usage_logger)

    async def search(self, query: str) -> tuple[Client, ...] | None:
        """Replace ``items`` with the clients matching ``query``."""
        return await self._store.run(
            "SEARCH",
            self._collect(lambda: self._api.search(query)),
            "Failed to search clients",
        )

    async def update_status(self, client_id: str, status: str) -> Client | None:
        client = await self._store.run(
            "STATUS_CHANGE",
            lambda: self._api.update_status(client_id, status),
            "Failed to update client status",
        )
        if client is not None:
            self._usage.info(f"Set client {client_id} status to {status}")
        return client

    async def fetch_invoices(self, client_id: str) -> tuple[Invoice, ...] | None:
        """Load the client's invoices into ``selected_invoices``."""
        return await self._store.run(
            "FETCH_RELATED_INVOICES",
            self._collect(lambda: self._api.list_invoices(client_id)),
            "Failed to fetch client invoices",
        )

    async def fetch_payments(self, client_id: str) -> tuple[Payment, ...] | None:
        """Load the client's payments into ``selected_payments``."""
        return await self._store.run(
            "FETCH_RELATED_PAYMENTS",
            self._collect(lambda: self._api.list_payments(client_id)),
            "Failed to fetch client payments",
        )


__all__ = ["ClientSync"]
