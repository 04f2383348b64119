import logging
import threading
import weakref
from typing import Sequence

from kits_api.exceptions import IntegrationError
from kits_api.kits.schema import KIT_COLUMNS, header_range
from kits_api.sheets.client import SpreadsheetClient

logger = logging.getLogger("kits_api.kits")


class TenantSheetProvisioner:
    """
    Makes sure a tenant owns a tab titled with its key, seeded with the kit header row.
    Safe to call on every request.
    """

    def __init__(
        self,
        client: SpreadsheetClient,
        header: Sequence[str] = KIT_COLUMNS,
        repair_missing_header: bool = True,
    ):
        self.client = client
        self.header = list(header)
        self.repair_missing_header = repair_missing_header
        # Entries vanish once no ensure() call holds the lock.
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def ensure(self, tenant_key: str) -> bool:
        """Returns True when the tab had to be created."""
        with self._lock_for(tenant_key):
            if tenant_key in self.client.list_sheet_titles():
                if self.repair_missing_header and not self._has_header(tenant_key):
                    logger.warning(f"Tab '{tenant_key}' has no header row, writing it")
                    self._write_header(tenant_key)
                return False

            logger.info(f"Creating tab '{tenant_key}'")
            self._create_tab(tenant_key)
            self._write_header(tenant_key)
            return True

    def _create_tab(self, tenant_key: str) -> None:
        try:
            self.client.add_sheet(tenant_key)
        except IntegrationError:
            # Another process may have created it between our listing and addSheet.
            if tenant_key not in self.client.list_sheet_titles():
                raise
            logger.info(f"Tab '{tenant_key}' was created concurrently")

    def _has_header(self, tenant_key: str) -> bool:
        rows = self.client.get_values(header_range(tenant_key))
        return bool(rows) and any(str(cell).strip() for cell in rows[0])

    def _write_header(self, tenant_key: str) -> None:
        self.client.update_values(header_range(tenant_key), [list(self.header)])
        logger.info(f"Header initialised for '{tenant_key}'")

    def _lock_for(self, tenant_key: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(tenant_key)
            if lock is None:
                lock = self._locks[tenant_key] = threading.Lock()
            return lock
