"""Shared remote-sync operations for one entity store."""

from typing import Any, Generic, TypeVar

from billing_admin.application.ports.billing_api import Fields
from billing_admin.application.state.store import Store
from billing_admin.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)

R = TypeVar("R")


class EntitySync(Generic[R]):
    """Wire the CRUD calls of an API port to an entity store.

    Every operation resolves through ``Store.run``: the store sees a pending
    event, then exactly one fulfilled or rejected event. Methods return the
    resolved payload, or None when the call failed.
    """

    entity = "record"

    def __init__(
        self,
        api,
        store: Store,
        logger=None,
        usage_logger=None,
    ) -> None:
        """Initialize the sync operations.

        Args:
            api: Port implementing list_all/get/create/update/delete.
            store: Store receiving the lifecycle events.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording record changes.
        """
        self._api = api
        self._store = store
        self._logger = logger or get_app_logger()
        self._usage = usage_logger or get_usage_logger()

    @property
    def store(self) -> Store:
        return self._store

    async def fetch_all(self) -> tuple[R, ...] | None:
        """Load every record into ``items``."""
        records = await self._store.run(
            "FETCH_ALL",
            self._collect(self._api.list_all),
            f"Failed to fetch {self.entity}s",
        )
        if records is not None:
            self._logger.info(f"Fetched {len(records)} {self.entity}s")
        return records

    async def fetch_one(self, record_id: str) -> R | None:
        """Load one record into ``selected``."""
        return await self._store.run(
            "FETCH_ONE",
            lambda: self._api.get(record_id),
            f"Failed to fetch {self.entity}",
        )

    async def create(self, fields: Fields) -> R | None:
        """Create a record and append it to ``items``."""
        record = await self._store.run(
            "CREATE",
            lambda: self._api.create(fields),
            f"Failed to create {self.entity}",
        )
        if record is not None:
            self._usage.info(f"Created {self.entity} {record.id}")
        return record

    async def update(self, record_id: str, fields: Fields) -> R | None:
        """Update a record and replace it in ``items``."""
        record = await self._store.run(
            "UPDATE",
            lambda: self._api.update(record_id, fields),
            f"Failed to update {self.entity}",
        )
        if record is not None:
            self._usage.info(f"Updated {self.entity} {record_id}")
        return record

    async def delete(self, record_id: str) -> str | None:
        """Delete a record and drop it from ``items``."""

        async def call() -> str:
            await self._api.delete(record_id)
            return record_id

        deleted = await self._store.run(
            "DELETE", call, f"Failed to delete {self.entity}"
        )
        if deleted is not None:
            self._usage.info(f"Deleted {self.entity} {record_id}")
        return deleted

    @staticmethod
    def _collect(fetch):
        """Wrap a list-returning coroutine so that it yields a tuple."""

        async def call() -> tuple[Any, ...]:
            return tuple(await fetch())

        return call


__all__ = ["EntitySync"]
