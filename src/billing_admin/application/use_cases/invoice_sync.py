"""Remote-sync operations for invoices."""

from billing_admin.application.ports.billing_api import InvoicesApiPort
from billing_admin.application.state.events import Fulfilled
from billing_admin.application.state.store import Store
from billing_admin.application.use_cases.entity_sync import EntitySync
from billing_admin.domain.models.records import Invoice, PaymentDraft
from billing_admin.domain.services.aggregation import invoice_balance
from billing_admin.domain.services.validation import (
    validate_payment_amount,
    warn_on_overpayment,
)


class InvoiceSync(EntitySync[Invoice]):
    """Invoice operations, including payment recording and PDF export."""

    entity = "invoice"

    def __init__(
        self,
        api: InvoicesApiPort,
        store: Store,
        payments_store: Store | None = None,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the invoice operations.

        Args:
            api: Invoices API port.
            store: Invoices store.
            payments_store: Optional payments store that receives recorded
                payments.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording record changes.
        """
        super().__init__(api, store, logger=logger, usage_logger=usage_logger)
        self._payments_store = payments_store

    async def update_status(self, invoice_id: str, status: str) -> Invoice | None:
        invoice = await self._store.run(
            "STATUS_CHANGE",
            lambda: self._api.update_status(invoice_id, status),
            "Failed to update invoice status",
        )
        if invoice is not None:
            self._usage.info(f"Set invoice {invoice_id} status to {status}")
        return invoice

    async def record_payment(
        self,
        invoice_id: str,
        draft: PaymentDraft,
    ) -> Invoice | None:
        """Record a payment and refresh the invoice it settles.

        The invoice embeds a copy of its payments, so it is re-fetched and
        replaced wholesale once the payment is stored.

        Args:
            invoice_id: Invoice receiving the payment.
            draft: Payment data.

        Returns:
            Invoice | None: The refreshed invoice, or None on failure.
        """

        async def call() -> Invoice:
            validate_payment_amount(draft.amount)
            payment = await self._api.record_payment(invoice_id, draft)
            self._usage.info(
                f"Recorded payment {payment.id} of {payment.amount} "
                f"on invoice {invoice_id}"
            )
            if self._payments_store is not None:
                self._payments_store.dispatch(Fulfilled("CREATE", payment))
            return await self._api.get(invoice_id)

        invoice = await self._store.run(
            "RECORD_PAYMENT", call, "Failed to record payment"
        )
        if invoice is not None:
            warn_on_overpayment(
                invoice.invoice_number, invoice_balance(invoice), self._logger
            )
        return invoice

    async def download_pdf(self, invoice_id: str) -> bytes | None:
        """Return the invoice PDF; only ``loading``/``error`` change."""
        return await self._store.run(
            "DOWNLOAD_PDF",
            lambda: self._api.download_pdf(invoice_id),
            "Failed to generate PDF",
        )


__all__ = ["InvoiceSync"]
