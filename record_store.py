"""
Record store - the persistence side the composer writes to.

The composer only ever touches two fields of a record:
`recommended_layout` and the opaque `decorations` blob. Everything else
(photos, audio, captions) belongs to the record-capture flow.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Optional, Dict

from models import RecordInput, StoredRecord

logger = logging.getLogger(__name__)


class RecordNotFound(KeyError):
    pass


class RecordStore(ABC):
    """Abstract record store."""

    @abstractmethod
    def create(self, record: RecordInput) -> StoredRecord:
        pass

    @abstractmethod
    def get(self, record_id: str) -> StoredRecord:
        """Raises RecordNotFound for unknown ids."""
        pass

    @abstractmethod
    def update_decorations(
        self,
        record_id: str,
        decorations: Optional[str] = None,
        recommended_layout: Optional[str] = None,
    ) -> StoredRecord:
        """Overwrite the composer-owned fields; None leaves a field as is."""
        pass

    @abstractmethod
    def delete(self, record_id: str) -> None:
        pass


class InMemoryRecordStore(RecordStore):
    """Process-local store, enough for a single API worker and tests."""

    def __init__(self):
        self._records: Dict[str, StoredRecord] = {}

    def create(self, record: RecordInput) -> StoredRecord:
        stored = StoredRecord(id=uuid.uuid4().hex, record=record)
        self._records[stored.id] = stored
        logger.info(f"Record {stored.id} created")
        return stored

    def get(self, record_id: str) -> StoredRecord:
        try:
            return self._records[record_id]
        except KeyError:
            raise RecordNotFound(record_id)

    def update_decorations(
        self,
        record_id: str,
        decorations: Optional[str] = None,
        recommended_layout: Optional[str] = None,
    ) -> StoredRecord:
        stored = self.get(record_id)
        update = {}
        if decorations is not None:
            update["decorations"] = decorations
        if recommended_layout is not None:
            update["recommended_layout"] = recommended_layout

        stored = stored.model_copy(update=update)
        self._records[record_id] = stored
        return stored

    def delete(self, record_id: str) -> None:
        # Decorations live on the record, so they go with it
        if self._records.pop(record_id, None) is None:
            raise RecordNotFound(record_id)
        logger.info(f"Record {record_id} deleted")
