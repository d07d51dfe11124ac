"""SQLAlchemy models for the bankledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class LedgerMeta(Base):
    """Single-row table holding the snapshot version and identifier counter."""

    __tablename__ = "ledger_meta"

    id = Column(Integer, primary_key=True)
    schema_version = Column(Integer, nullable=False)
    account_counter = Column(Integer, nullable=False)
    saved_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Account(Base):
    """Bank account model."""

    __tablename__ = "accounts"

    account_number = Column(String, primary_key=True)
    kind = Column(String, nullable=False)
    holder_name = Column(String, nullable=False)
    balance = Column(Numeric(18, 2), nullable=False)
    interest_rate_percent = Column(Numeric(9, 4), nullable=True)
    overdraft_limit = Column(Numeric(18, 2), nullable=True)
    position = Column(Integer, nullable=False)

    # Relationships
    transactions = relationship(
        "Transaction",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="Transaction.sequence",
    )


class Transaction(Base):
    """Transaction log entry model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_number = Column(String, ForeignKey("accounts.account_number"), nullable=False)
    sequence = Column(Integer, nullable=False)
    kind = Column(String, nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    balance_after = Column(Numeric(18, 2), nullable=False)
    timestamp = Column(DateTime, nullable=False)

    # Log order within an account
    __table_args__ = (UniqueConstraint("account_number", "sequence", name="uq_account_sequence"),)

    # Relationships
    account = relationship("Account", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
