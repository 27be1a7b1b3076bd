"""Shared application context injected into the views."""
from typing import List, Optional

from medibook import config
from medibook.errors import TransportError
from medibook.http_client import BackendClient
from medibook.logging_config import get_logger
from medibook.models import Doctor
from medibook.notifications import Navigator, Notifier

logger = get_logger(__name__)


class AppContext:
    """
    Process-wide state shared by the booking screens.

    Holds the cached doctor directory, the auth token and the collaborators
    every view needs. Only ``refresh_doctors`` mutates the doctor cache.
    """

    def __init__(
        self,
        client: BackendClient,
        token: Optional[str] = None,
        doctors: Optional[List[Doctor]] = None,
        currency_symbol: str = config.CURRENCY_SYMBOL,
        notifier: Optional[Notifier] = None,
        navigator: Optional[Navigator] = None
    ):
        self.client = client
        self.token = token or None
        self.doctors: List[Doctor] = list(doctors or [])
        self.currency_symbol = currency_symbol
        self.notifier = notifier or Notifier()
        self.navigator = navigator or Navigator()

    @property
    def backend_url(self) -> str:
        return self.client.base_url

    def find_doctor(self, doc_id: str) -> Optional[Doctor]:
        return next((doc for doc in self.doctors if doc.id == doc_id), None)

    def refresh_doctors(self) -> bool:
        """
        Reload the doctor directory from the backend.

        Returns:
            True if the cache was replaced
        """
        try:
            data = self.client.list_doctors()
        except TransportError as e:
            logger.error("doctor_refresh_failed", error=str(e))
            self.notifier.error(e.user_message("Failed to load doctors"))
            return False

        if not data.success:
            self.notifier.error(data.message or "Failed to load doctors")
            return False

        self.doctors = data.doctors
        logger.info("doctors_refreshed", count=len(self.doctors))
        return True
