"""
Record store for ChargeLog.

RecordStore is the single handle through which the API and the import step
read and write records. It hands out detached copies, so callers can never
mutate persisted state by accident; every write goes through a method here
and runs in its own transaction.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from chargelog.models import RECORD_MODELS, RecordKind, Setting, new_record_id

logger = logging.getLogger(__name__)

LAST_EXPORT_KEY = 'last_export_at'

# Columns that update() may change
EDITABLE_FIELDS = {
    RecordKind.CHARGING: ('date', 'mileage', 'amount', 'price', 'cost', 'is_full'),
    RecordKind.PARKING: ('date', 'cost'),
}


class RecordStore:
    """Durable charging and parking collections plus a small settings table."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    @contextmanager
    def session_scope(self):
        """Provide a transactional scope: commit on success, roll back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Store transaction rolled back: {e}", exc_info=True)
            raise
        finally:
            session.close()

    @staticmethod
    def _model(kind):
        return RECORD_MODELS[RecordKind(kind)]

    def get(self, kind) -> List:
        """All records of one kind, oldest first, as detached copies."""
        model = self._model(kind)
        with self.session_scope() as session:
            rows = session.query(model).order_by(model.date, model.created_at).all()
            return [row.copy() for row in rows]

    def get_by_id(self, kind, record_id: str):
        model = self._model(kind)
        with self.session_scope() as session:
            row = session.get(model, record_id)
            return row.copy() if row is not None else None

    def set(self, kind, collection: Iterable) -> None:
        """Replace one collection wholesale."""
        self.replace({kind: collection})

    def replace(self, collections: Dict) -> None:
        """
        Replace several collections in one transaction.

        Either every listed kind is replaced or, on any error, none is.

        Args:
            collections: Mapping of RecordKind (or kind name) to records
        """
        with self.session_scope() as session:
            for kind, records in collections.items():
                model = self._model(kind)
                session.query(model).delete(synchronize_session=False)
                count = 0
                for record in records:
                    session.add(record.copy())
                    count += 1
                logger.debug(f"Replacing {RecordKind(kind).value} collection with {count} records")

    def add(self, kind, record):
        """
        Persist a new record; an id is generated if the record has none.

        Returns:
            Detached copy of the stored record
        """
        stored = record.copy()
        if not stored.id:
            stored.id = new_record_id(kind)
        with self.session_scope() as session:
            session.add(stored)
        logger.info(f"Added {RecordKind(kind).value} record {stored.id}")
        return stored.copy()

    def update(self, kind, record_id: str, fields: Dict) -> bool:
        """
        Change the editable fields of one record.

        Returns:
            True if the record existed, False otherwise (nothing is changed)
        """
        kind = RecordKind(kind)
        model = self._model(kind)
        with self.session_scope() as session:
            row = session.get(model, record_id)
            if row is None:
                return False
            for name in EDITABLE_FIELDS[kind]:
                if name in fields:
                    setattr(row, name, fields[name])
        logger.info(f"Updated {kind.value} record {record_id}")
        return True

    def delete(self, kind, record_id: str) -> bool:
        """
        Remove one record by id.

        Returns:
            True if a record was removed; False for an unknown id
        """
        model = self._model(kind)
        with self.session_scope() as session:
            row = session.get(model, record_id)
            if row is None:
                logger.debug(f"Delete ignored, no {RecordKind(kind).value} record {record_id}")
                return False
            session.delete(row)
        logger.info(f"Deleted {RecordKind(kind).value} record {record_id}")
        return True

    def clear(self) -> None:
        """Remove every charging and parking record."""
        self.replace({kind: [] for kind in RecordKind})
        logger.info("Cleared all records")

    def get_setting(self, key: str, default: Optional[str] = None) -> Optional[str]:
        with self.session_scope() as session:
            setting = session.get(Setting, key)
            return setting.value if setting is not None else default

    def set_setting(self, key: str, value: str) -> None:
        with self.session_scope() as session:
            session.merge(Setting(key=key, value=value))

    def record_last_export(self, when: Optional[datetime] = None) -> datetime:
        """Remember when the last export happened (UTC)."""
        when = when or datetime.now(timezone.utc)
        self.set_setting(LAST_EXPORT_KEY, when.isoformat())
        return when

    def last_export(self) -> Optional[datetime]:
        """Time of the last export, or None if there has never been one."""
        value = self.get_setting(LAST_EXPORT_KEY)
        if not value:
            return None
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            logger.debug(f"Ignoring unreadable last export time: {value!r}")
            return None
