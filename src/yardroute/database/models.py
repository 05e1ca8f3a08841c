"""SQLAlchemy models for yardroute database."""

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
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class ServiceType(Base):
    """Price book entry model."""

    __tablename__ = "service_types"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    base_price = Column(Numeric(10, 2), nullable=True)
    price_per_extra_unit = Column(Numeric(10, 2), nullable=True)
    times_per_week = Column(Integer, default=1, nullable=False)
    frequency = Column(String, default="weekly", nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Customer(Base):
    """Customer model."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    email = Column(String, nullable=True)
    dog_count = Column(Integer, default=1, nullable=False)
    status = Column(String, default="active", nullable=False)
    service_type_id = Column(Integer, ForeignKey("service_types.id"), nullable=True)
    autopay_enabled = Column(Boolean, default=False, nullable=False)
    payment_customer_ref = Column(String, nullable=True)
    payment_method_ref = Column(String, nullable=True)
    sms_opt_in = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    rules = relationship("RecurrenceRule", back_populates="customer", cascade="all, delete-orphan")
    visits = relationship("ScheduledVisit", back_populates="customer", cascade="all, delete-orphan")
    invoices = relationship("Invoice", back_populates="customer", cascade="all, delete-orphan")


class RecurrenceRule(Base):
    """Recurring schedule model.

    ``days_of_week`` is stored as a comma separated list of day numbers
    (Sunday=0), e.g. "1,3,5".
    """

    __tablename__ = "recurrence_rules"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    service_type_id = Column(Integer, ForeignKey("service_types.id"), nullable=True)
    frequency = Column(String, nullable=False)
    days_of_week = Column(String, default="", nullable=False)
    start_date = Column(Date, nullable=False)
    window_start = Column(String, nullable=False)
    window_end = Column(String, nullable=False)
    timezone = Column(String, nullable=False)
    paused = Column(Boolean, default=False, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    customer = relationship("Customer", back_populates="rules")


class ScheduledVisit(Base):
    """Dated service visit (route stop) model."""

    __tablename__ = "visits"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    date = Column(Date, nullable=False)
    scheduled_time = Column(String, nullable=True)
    status = Column(String, default="scheduled", nullable=False)
    order_index = Column(Integer, default=0, nullable=False)
    billable = Column(Boolean, default=True, nullable=False)
    rule_id = Column(Integer, ForeignKey("recurrence_rules.id"), nullable=True)
    service_kind = Column(String, default="regular", nullable=False)
    started_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    calculated_cost = Column(Numeric(10, 2), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # One visit per customer per day
    __table_args__ = (UniqueConstraint("customer_id", "date", name="uq_visit_customer_date"),)

    # Relationships
    customer = relationship("Customer", back_populates="visits")


class Invoice(Base):
    """Invoice model."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    invoice_number = Column(String, unique=True, nullable=False)
    billing_period = Column(String, nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String, default="unpaid", nullable=False)
    due_date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    paid_at = Column(DateTime, nullable=True)
    external_payment_reference = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    customer = relationship("Customer", back_populates="invoices")


class ReminderLog(Base):
    """Reminder delivery attempt model."""

    __tablename__ = "reminder_logs"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    service_date = Column(Date, nullable=False)
    status = Column(String, nullable=False)
    external_reference = Column(String, nullable=True)
    error_message = Column(String, nullable=True)
    sent_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("customer_id", "service_date", name="uq_reminder_customer_date"),
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
