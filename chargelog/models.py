from datetime import datetime
from enum import Enum
import uuid as uuid_module

from sqlalchemy import Boolean, Column, Date, DateTime, Float, String, Text, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


Base = declarative_base()


class RecordKind(str, Enum):
    """The two record collections kept by the store."""

    CHARGING = 'charging'
    PARKING = 'parking'


def new_record_id(kind) -> str:
    """Generate a fresh opaque record id, e.g. ``charging_3f2a...``."""
    return f"{RecordKind(kind).value}_{uuid_module.uuid4().hex}"


class ChargingRecord(Base):
    """One charging event. ``mileage`` is the odometer reading, not a delta."""

    __tablename__ = 'charging_records'

    id = Column(String(64), primary_key=True)
    date = Column(Date, nullable=False, index=True)
    mileage = Column(Float, nullable=False, default=0.0)
    amount = Column(Float, nullable=False, default=0.0)  # energy added
    price = Column(Float, nullable=False, default=0.0)  # unit price
    cost = Column(Float, nullable=False, default=0.0)  # total paid
    is_full = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __init__(self, **kwargs):
        # Column defaults only apply on flush; transient records need them too
        kwargs.setdefault('mileage', 0.0)
        kwargs.setdefault('amount', 0.0)
        kwargs.setdefault('price', 0.0)
        kwargs.setdefault('cost', 0.0)
        kwargs.setdefault('is_full', False)
        super().__init__(**kwargs)

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.date.isoformat() if self.date else None,
            'mileage': self.mileage,
            'amount': self.amount,
            'price': self.price,
            'cost': self.cost,
            'is_full': bool(self.is_full),
        }

    def copy(self):
        """Return a transient copy carrying the same values."""
        return ChargingRecord(
            id=self.id,
            date=self.date,
            mileage=self.mileage,
            amount=self.amount,
            price=self.price,
            cost=self.cost,
            is_full=bool(self.is_full),
        )

    def __repr__(self):
        return f"<ChargingRecord {self.id} {self.date} {self.mileage}km full={self.is_full}>"


class ParkingRecord(Base):
    """One parking payment."""

    __tablename__ = 'parking_records'

    id = Column(String(64), primary_key=True)
    date = Column(Date, nullable=False, index=True)
    cost = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __init__(self, **kwargs):
        kwargs.setdefault('cost', 0.0)
        super().__init__(**kwargs)

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.date.isoformat() if self.date else None,
            'cost': self.cost,
        }

    def copy(self):
        return ParkingRecord(id=self.id, date=self.date, cost=self.cost)

    def __repr__(self):
        return f"<ParkingRecord {self.id} {self.date} {self.cost}>"


class Setting(Base):
    """Small key-value table for application state such as the last export time."""

    __tablename__ = 'settings'

    key = Column(String(64), primary_key=True)
    value = Column(Text)


RECORD_MODELS = {
    RecordKind.CHARGING: ChargingRecord,
    RecordKind.PARKING: ParkingRecord,
}


def get_engine(database_url):
    """Create database engine."""
    if database_url.startswith('sqlite') and ':memory:' in database_url:
        # One shared connection so every session sees the same in-memory database
        return create_engine(
            database_url,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)


def get_session_factory(engine):
    """Create a session factory whose objects stay readable after commit."""
    return sessionmaker(bind=engine, expire_on_commit=False)
