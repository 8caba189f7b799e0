from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from blocktix.database import Base
import enum


class EventStatus(str, enum.Enum):
    DRAFT = "draft"
    LIVE = "live"


class Event(Base):
    __tablename__ = "events"

    id = Column(String(120), primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(String(4000), nullable=True)
    starts_at = Column(DateTime(timezone=True), nullable=True)
    location = Column(String(300), nullable=True)
    image_url = Column(String(1000), nullable=True)
    category = Column(String(100), default="general")
    is_featured = Column(Boolean, default=False)
    status = Column(Enum(EventStatus), default=EventStatus.DRAFT, index=True)
    price = Column(Float, default=0)
    total_tickets = Column(Integer, default=0)
    available_tickets = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now())
    published_at = Column(DateTime, nullable=True)

    categories = relationship(
        "TicketCategory",
        back_populates="event",
        order_by="TicketCategory.position",
        cascade="all, delete-orphan"
    )


class TicketCategory(Base):
    __tablename__ = "ticket_categories"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(String(120), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(200), nullable=False)
    price = Column(Float, nullable=False, default=0)
    total = Column(Integer, nullable=False, default=0)
    available = Column(Integer, nullable=False, default=0)

    event = relationship("Event", back_populates="categories")


class ResaleRule(Base):
    __tablename__ = "resale_rules"

    event_id = Column(String(120), primary_key=True)
    allow_resale = Column(Boolean, nullable=False, default=True)
    allow_transfer = Column(Boolean, nullable=False, default=True)
    max_resale_price_multiplier = Column(Float, nullable=False, default=1.0)
    max_tickets_per_wallet = Column(Integer, nullable=True)
    single_use = Column(Boolean, nullable=False, default=False)
    updated_at = Column(DateTime, server_default=func.now())
