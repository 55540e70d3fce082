import json
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import ValidationError

from nutrifit.core.config import settings
from nutrifit.core.seed import build_demo_document
from nutrifit.schemas.document import FitnessDocument
from nutrifit.services.storage import Storage

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FitnessDocumentRepository:
    """Reads and writes the whole fitness document under one storage key."""

    def __init__(
            self,
            storage: Storage,
            key: Optional[str] = None,
            clock: Callable[[], datetime] = utc_now,
            seed: Callable[[datetime], FitnessDocument] = build_demo_document,
    ):
        self.storage = storage
        self.key = key or settings.FITNESS_DATA_KEY
        self.clock = clock
        self.seed = seed

    def exists(self) -> bool:
        return self.storage.get_item(self.key) is not None

    def load(self) -> FitnessDocument:
        raw = self.storage.get_item(self.key)
        if raw is None:
            logger.info(f"No fitness document under {self.key!r}, seeding demo data")
            return self.reseed()

        try:
            return FitnessDocument.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError, ValueError, TypeError) as e:
            logger.warning(f"Fitness document under {self.key!r} is corrupt, reseeding: {e}")
            return self.reseed()

    def save(self, document: FitnessDocument) -> None:
        self.storage.set_item(self.key, document.model_dump_json())

    def reseed(self) -> FitnessDocument:
        document = self.seed(self.clock())
        self.save(document)
        return document
