"""
Database setup for ChargeLog.

Creates the engine and the RecordStore for a Flask app so blueprints can
reach the store through get_store() without circular imports.
"""

import logging
import time

from flask import current_app
from sqlalchemy import event
from sqlalchemy.engine import Engine

from chargelog.models import Base, get_engine, get_session_factory
from chargelog.store import RecordStore

logger = logging.getLogger(__name__)

STORE_EXTENSION = 'chargelog_store'

# Add slow query logging (queries >500ms)
SLOW_QUERY_THRESHOLD_MS = 500


@event.listens_for(Engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Record query start time."""
    conn.info.setdefault("query_start_time", []).append(time.time())


@event.listens_for(Engine, "after_cursor_execute")
def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log slow queries."""
    duration_ms = (time.time() - conn.info["query_start_time"].pop(-1)) * 1000
    if duration_ms > SLOW_QUERY_THRESHOLD_MS:
        logger.warning(f"Slow query: {duration_ms:.2f}ms - {statement[:200]}")


def create_store(database_url: str) -> RecordStore:
    """Create the schema if needed and return a store bound to it."""
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)
    return RecordStore(get_session_factory(engine))


def init_app(app):
    """Attach a RecordStore for app.config['DATABASE_URL'] to the app."""
    database_url = app.config['DATABASE_URL']
    app.extensions[STORE_EXTENSION] = create_store(database_url)
    logger.info(f"Record store ready ({database_url.split('://', 1)[0]})")


def get_store() -> RecordStore:
    """Get the record store of the current app."""
    return current_app.extensions[STORE_EXTENSION]
