import logging
from datetime import datetime, timezone

from blocktix.errors import NotFoundError, ValidationError
from blocktix.models.event import EventStatus
from blocktix.schemas import Event, EventUpsert, TicketCategory, TicketCategoryCreate
from blocktix.stores.base import TicketStore

logger = logging.getLogger(__name__)


def normalize_categories(categories: list[TicketCategoryCreate]) -> list[TicketCategory]:
    """
    Trim names and default each category's availability to its total.
    Names must be non-empty and unique ignoring case; counts and prices
    must satisfy 0 <= available <= total and price >= 0.
    """
    normalized = []
    seen = set()
    for c in categories:
        name = c.name.strip()
        if not name:
            raise ValidationError("Category name required")
        if name.lower() in seen:
            raise ValidationError(f"Duplicate category name: {name}")
        seen.add(name.lower())

        available = c.total if c.available is None else c.available
        if c.price < 0 or c.total < 0:
            raise ValidationError(f"Invalid price or total for category {name}")
        if not 0 <= available <= c.total:
            raise ValidationError(f"Available must be between 0 and total for category {name}")

        normalized.append(TicketCategory(name=name, price=c.price, total=c.total, available=available))
    return normalized


def apply_inventory(event: Event, payload: EventUpsert) -> Event:
    """
    Set price and ticket counts. With categories the flat fields are
    derived: cheapest price, summed totals and summed availability.
    """
    if payload.categories:
        categories = normalize_categories(payload.categories)
        event.categories = categories
        event.price = min(c.price for c in categories)
        event.total_tickets = sum(c.total for c in categories)
        event.available_tickets = sum(c.available for c in categories)
    else:
        event.categories = []
        event.price = payload.price
        event.total_tickets = payload.total_tickets
        event.available_tickets = payload.total_tickets
    return event


class CatalogService:
    @staticmethod
    def list_live_events(store: TicketStore) -> list[Event]:
        return store.list_events(status=EventStatus.LIVE)

    @staticmethod
    def get_event(store: TicketStore, event_id: str) -> Event:
        event = store.get_event(event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    @staticmethod
    def upsert_event(store: TicketStore, payload: EventUpsert) -> tuple[Event, bool]:
        """
        Create an event, or replace the one named by payload.id.
        Saved events always go back to draft until published.
        Returns the stored event and whether it was created.
        """
        now = datetime.now(timezone.utc)
        created_at = now
        if payload.id:
            existing = store.get_event(payload.id)
            if existing is None:
                raise NotFoundError("Event not found")
            created_at = existing.created_at or now

        event = Event(
            id=payload.id,
            title=payload.title,
            description=payload.description,
            starts_at=payload.starts_at,
            location=payload.location,
            image_url=payload.image_url,
            category=payload.category or "general",
            is_featured=payload.is_featured,
            status=EventStatus.DRAFT,
            created_at=created_at,
            updated_at=now
        )
        saved = store.save_event(apply_inventory(event, payload))
        logger.info(f"{'Updated' if payload.id else 'Created'} event {saved.id} ({saved.title})")
        return saved, not payload.id

    @staticmethod
    def publish_event(store: TicketStore, event_id: str) -> Event:
        event = CatalogService.get_event(store, event_id)
        now = datetime.now(timezone.utc)
        event.status = EventStatus.LIVE
        event.published_at = now
        event.updated_at = now
        saved = store.save_event(event)
        logger.info(f"Published event {event_id}")
        return saved

    @staticmethod
    def delete_event(store: TicketStore, event_id: str) -> None:
        store.delete_event(event_id)
        logger.info(f"Deleted event {event_id}")
