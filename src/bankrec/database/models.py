"""SQLAlchemy models for bankrec database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class BankAccount(Base):
    """Bank account model."""

    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    bank_name = Column(String, nullable=False)
    account_number = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    import_batches = relationship("ImportBatch", back_populates="bank_account")
    transactions = relationship("FinancialTransaction", back_populates="bank_account")


class Supplier(Base):
    """Supplier model (read-only for reconciliation)."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    document = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    purchase_orders = relationship("PurchaseOrder", back_populates="supplier")


class Contractor(Base):
    """Contractor model (read-only for reconciliation)."""

    __tablename__ = "contractors"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    document = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)


class Project(Base):
    """Project model; purchase orders are tenant-scoped through it."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)

    purchase_orders = relationship("PurchaseOrder", back_populates="project")


class PurchaseOrder(Base):
    """Purchase order model."""

    __tablename__ = "purchase_orders"

    id = Column(Integer, primary_key=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False)
    order_number = Column(String, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    order_date = Column(Date, nullable=False)
    status = Column(String, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="purchase_orders")
    supplier = relationship("Supplier", back_populates="purchase_orders")


class ImportBatch(Base):
    """One statement file ingestion event."""

    __tablename__ = "import_batches"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False, index=True)
    bank_account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False)
    file_name = Column(String, nullable=False)
    file_type = Column(String, nullable=False)
    total_records = Column(Integer, nullable=False)
    imported_count = Column(Integer, nullable=False)
    duplicate_count = Column(Integer, nullable=False)
    period_start = Column(Date, nullable=True)
    period_end = Column(Date, nullable=True)
    imported_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    bank_account = relationship("BankAccount", back_populates="import_batches")
    transactions = relationship(
        "FinancialTransaction",
        back_populates="import_batch",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class FinancialTransaction(Base):
    """Financial transaction model; amount is stored as an absolute value."""

    __tablename__ = "financial_transactions"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(String, nullable=False)
    bank_account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    raw_description = Column(String, nullable=True)
    external_id = Column(String, nullable=True)
    import_batch_id = Column(
        Integer, ForeignKey("import_batches.id", ondelete="CASCADE"), nullable=True
    )
    reconciliation_status = Column(String, nullable=False)
    linked_entity_type = Column(String, nullable=True)
    linked_entity_id = Column(Integer, nullable=True)
    linked_entity_name = Column(String, nullable=True)
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("ix_transactions_account_external_id", "bank_account_id", "external_id"),
        Index("ix_transactions_tenant_status", "tenant_id", "reconciliation_status"),
    )

    # Relationships
    bank_account = relationship("BankAccount", back_populates="transactions")
    import_batch = relationship("ImportBatch", back_populates="transactions")


def _unicode_lower(value):
    return value.lower() if value is not None else None


@event.listens_for(Engine, "connect")
def _configure_sqlite_connection(dbapi_connection, connection_record):
    """Switch on foreign keys and Unicode case folding for SQLite.

    SQLite only enforces ON DELETE CASCADE with foreign keys switched on, and
    its built-in lower() folds ASCII letters only ("Ç" stays "Ç").
    """
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
