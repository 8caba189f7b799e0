from pydantic import Field
from datetime import datetime
from typing import Optional

from blocktix.models.event import EventStatus
from blocktix.schemas.base import CamelModel


class TicketCategory(CamelModel):
    name: str
    price: float = 0
    total: int = 0
    available: int = 0


class Event(CamelModel):
    id: Optional[str] = None
    title: str
    description: Optional[str] = None
    starts_at: Optional[datetime] = Field(default=None, alias="date")
    location: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="image")
    category: str = "general"
    is_featured: bool = False
    status: EventStatus = EventStatus.DRAFT
    price: float = 0
    total_tickets: int = 0
    available_tickets: int = 0
    categories: list[TicketCategory] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None

    def find_category(self, name: str) -> Optional[TicketCategory]:
        wanted = name.strip().lower()
        for category in self.categories:
            if category.name.lower() == wanted:
                return category
        return None


class TicketCategoryCreate(CamelModel):
    name: str = ""
    price: float = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)
    available: Optional[int] = Field(default=None, ge=0)


class EventUpsert(CamelModel):
    id: Optional[str] = None
    title: str = Field(min_length=1)
    description: Optional[str] = None
    starts_at: Optional[datetime] = Field(default=None, alias="date")
    location: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="image")
    price: float = Field(default=0, ge=0)
    total_tickets: int = Field(default=0, ge=0)
    category: Optional[str] = None
    is_featured: bool = False
    categories: Optional[list[TicketCategoryCreate]] = None


class ResaleRules(CamelModel):
    event_id: Optional[str] = None
    allow_resale: bool = True
    allow_transfer: bool = True
    max_resale_price_multiplier: float = 1.0
    max_tickets_per_wallet: Optional[int] = None
    single_use: bool = False
    updated_at: Optional[datetime] = None


class RulesUpdate(CamelModel):
    allow_resale: bool = True
    allow_transfer: bool = True
    max_resale_price_multiplier: float = Field(default=1.0, ge=0)
    max_tickets_per_wallet: Optional[int] = Field(default=None, ge=0)
    single_use: bool = False
