"""Remote-sync operations for payments."""

from billing_admin.application.ports.billing_api import (
    Fields,
    InvoicesApiPort,
    PaymentsApiPort,
)
from billing_admin.application.state.store import Store
from billing_admin.application.use_cases.entity_sync import EntitySync
from billing_admin.domain.models.records import Payment


class PaymentSync(EntitySync[Payment]):
    """Payment operations.

    When an invoices API and store are attached, changing a payment
    re-fetches its parent invoice so the invoice's embedded payments stay
    current.
    """

    entity = "payment"

    def __init__(
        self,
        api: PaymentsApiPort,
        store: Store,
        invoices_api: InvoicesApiPort | None = None,
        invoices_store: Store | None = None,
        logger=None,
        usage_logger=None,
    ) -> None:
        super().__init__(api, store, logger=logger, usage_logger=usage_logger)
        self._invoices_api = invoices_api
        self._invoices_store = invoices_store

    async def fetch_by_invoice(self, invoice_id: str) -> tuple[Payment, ...] | None:
        """Replace ``items`` with the payments of one invoice."""
        return await self._store.run(
            "FETCH_BY_INVOICE",
            self._collect(lambda: self._api.list_by_invoice(invoice_id)),
            "Failed to fetch payments for invoice",
        )

    async def create(self, fields: Fields) -> Payment | None:
        payment = await super().create(fields)
        if payment is not None:
            await self._refresh_invoice(payment.invoice.id)
        return payment

    async def delete(self, payment_id: str) -> str | None:
        """Delete a payment, then refresh its parent invoice when known."""
        invoice_id = self._parent_invoice_id(payment_id)
        deleted = await super().delete(payment_id)
        if deleted is not None and invoice_id is not None:
            await self._refresh_invoice(invoice_id)
        return deleted

    def _parent_invoice_id(self, payment_id: str) -> str | None:
        state = self._store.state
        candidates = (*state.items, state.selected)
        for payment in candidates:
            if payment is not None and payment.id == payment_id:
                return payment.invoice.id or None
        return None

    async def _refresh_invoice(self, invoice_id: str) -> None:
        if self._invoices_api is None or self._invoices_store is None:
            return
        await self._invoices_store.run(
            "UPDATE",
            lambda: self._invoices_api.get(invoice_id),
            "Failed to fetch invoice",
        )


__all__ = ["PaymentSync"]
