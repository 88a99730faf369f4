"""SQLAlchemy models for the cashplan session store."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from cashplan.database.types import DecimalText

Base = declarative_base()


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    original_date = Column(Date, nullable=False)
    adjusted_date = Column(Date, nullable=False, index=True)
    partner = Column(String, nullable=False, default="")
    invoice_no = Column(String, nullable=False, default="")
    type = Column(String, nullable=False)
    amount = Column(DecimalText, nullable=False)
    currency = Column(String, nullable=False, index=True)
    payment_type = Column(String, nullable=False, default="")
    is_locked = Column(Boolean, nullable=False, default=False)


class OpeningBalance(Base):
    """Opening balance per account."""

    __tablename__ = "opening_balances"

    currency = Column(String, primary_key=True)
    amount = Column(DecimalText, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    In-memory SQLite URLs share one connection so that every session sees
    the same database for the lifetime of the process.
    """
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
