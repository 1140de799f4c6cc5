"""
Fetch-Sort-Filter controller for detection history views.

Holds one category's detection records, sorted most recent first, and the
subset matching the selected label. State machine:

    IDLE -> LOADING -> READY | FAILED

READY and FAILED stay put until the next fetch. Changing the filter only
re-derives the displayed list; it never goes back to the network.
"""
from typing import Iterable, List, Optional, Sequence
import asyncio
import logging

from teadoc.api.schemas import DetectionRecord
from teadoc.core.errors import DetectionServiceError, InvalidHistoryRequest
from teadoc.core.session import UserSession
from teadoc.services.detection_client import DetectionClient, history_path
from teadoc.services.history.categories import feature_list, is_known_category
from teadoc.services.state import FetchState, RequestTracker

logger = logging.getLogger(__name__)


def _recency_key(record: DetectionRecord):
    ts = record.created_at
    # Naive timestamps are local wall time, as they are displayed
    return ts if ts.tzinfo is not None else ts.astimezone()


def sort_by_recency(records: Iterable[DetectionRecord]) -> List[DetectionRecord]:
    """Most recent first; ties keep response order (sorted() is stable)."""
    return sorted(records, key=_recency_key, reverse=True)


def filter_by_feature(records: Sequence[DetectionRecord], feature: Optional[str]) -> List[DetectionRecord]:
    """Records whose label contains `feature` as a substring. No filter keeps all."""
    if not feature:
        return list(records)
    return [r for r in records if r.label and feature in r.label]


class HistoryController:
    """
    Usage:
        controller = HistoryController(DetectionClient(), session=user)
        controller.initialize("Blister Blight", "blister-blight")
        controller.set_filter("blister_blight")
        controller.displayed
    """

    def __init__(self, client: Optional[DetectionClient] = None, session: Optional[UserSession] = None):
        self._client = client if client is not None else DetectionClient()
        self.session = session
        self.category: Optional[str] = None
        self.url: Optional[str] = None
        self.path: Optional[str] = None

        self.state = FetchState.IDLE
        self.error_message: Optional[str] = None
        self.selected_feature: Optional[str] = None

        self._records: List[DetectionRecord] = []
        self._displayed: List[DetectionRecord] = []
        self._tracker = RequestTracker()

    # ─────────────────────────────────────────────────────
    # Setup
    # ─────────────────────────────────────────────────────

    def configure(self, category: str, url: str) -> None:
        """Validate inputs and build the resource path without fetching."""
        if not is_known_category(category):
            raise InvalidHistoryRequest(f"Invalid category: {category!r}")
        if not isinstance(url, str) or not url.strip():
            raise InvalidHistoryRequest("Invalid url: history identifier is required")
        url = url.strip()
        if "/" in url or url in (".", ".."):
            raise InvalidHistoryRequest(f"Invalid url: {url!r}")

        self.category = category
        self.url = url
        self.path = history_path(url)

    def initialize(self, category: str, url: str) -> FetchState:
        self.configure(category, url)
        logger.info(f"History view for {category!r} at {self.path}")
        return self.fetch()

    # ─────────────────────────────────────────────────────
    # Fetching
    # ─────────────────────────────────────────────────────

    def begin_fetch(self) -> int:
        """Enter LOADING and return the generation tag for this request."""
        if self.path is None:
            raise InvalidHistoryRequest("History view is not initialized")
        self.state = FetchState.LOADING
        return self._tracker.begin()

    def complete_fetch(
        self,
        generation: int,
        records: Optional[Iterable[DetectionRecord]] = None,
        error: Optional[BaseException] = None,
    ) -> bool:
        """
        Apply a fetch result if it belongs to the latest request.

        On error the previously held records are kept. Returns False when
        the result was discarded as superseded.
        """
        if not self._tracker.is_current(generation):
            return False

        if error is not None:
            self.state = FetchState.FAILED
            self.error_message = str(error) or error.__class__.__name__
            return True

        self._records = sort_by_recency(records or [])
        self.error_message = None
        self.state = FetchState.READY
        self._refilter()
        return True

    def fetch(self) -> FetchState:
        generation = self.begin_fetch()
        try:
            records = self._client.list_detections(self.path)
        except DetectionServiceError as e:
            logger.error(f"Error fetching detection history from {self.path}: {e}")
            self.complete_fetch(generation, error=e)
            return self.state
        except Exception as e:
            logger.error(f"Unexpected error fetching {self.path}", exc_info=True)
            self.complete_fetch(generation, error=e)
            raise

        self.complete_fetch(generation, records=records)
        return self.state

    async def fetch_async(self) -> FetchState:
        """Same as fetch(), running the blocking transport in a worker thread."""
        generation = self.begin_fetch()
        try:
            records = await asyncio.to_thread(self._client.list_detections, self.path)
        except DetectionServiceError as e:
            logger.error(f"Error fetching detection history from {self.path}: {e}")
            self.complete_fetch(generation, error=e)
            return self.state
        except Exception as e:
            logger.error(f"Unexpected error fetching {self.path}", exc_info=True)
            self.complete_fetch(generation, error=e)
            raise

        self.complete_fetch(generation, records=records)
        return self.state

    # ─────────────────────────────────────────────────────
    # Filtering
    # ─────────────────────────────────────────────────────

    def set_filter(self, feature: Optional[str]) -> List[DetectionRecord]:
        self.selected_feature = feature or None
        self._refilter()
        return self.displayed

    def _refilter(self) -> None:
        self._displayed = filter_by_feature(self._records, self.selected_feature)

    # ─────────────────────────────────────────────────────
    # Read-only views
    # ─────────────────────────────────────────────────────

    @property
    def records(self) -> List[DetectionRecord]:
        return list(self._records)

    @property
    def displayed(self) -> List[DetectionRecord]:
        return list(self._displayed)

    @property
    def features(self) -> List[str]:
        return feature_list(self.category)

    @property
    def loading(self) -> bool:
        return self.state == FetchState.LOADING

    @property
    def error(self) -> bool:
        return self.state == FetchState.FAILED

    @property
    def total(self) -> int:
        return len(self._displayed)
