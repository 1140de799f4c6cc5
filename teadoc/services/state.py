from enum import Enum
import logging

logger = logging.getLogger(__name__)


class FetchState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class RequestTracker:
    """
    Tags each fetch with a generation number so a slow, superseded
    response can be recognised and dropped.
    """

    def __init__(self):
        self.generation = 0

    def begin(self) -> int:
        self.generation += 1
        return self.generation

    def is_current(self, generation: int) -> bool:
        if generation != self.generation:
            logger.info(f"Discarding response for superseded request {generation} (current {self.generation})")
            return False
        return True
