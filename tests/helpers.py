from datetime import datetime, timezone

from blocktix.schemas import EventUpsert, RulesUpdate
from blocktix.services.catalog import CatalogService
from blocktix.services.rules import RuleService

ADMIN_KEY = "adm-5f2c9a"
BUYER = "asha@buyers.in"
OTHER_BUYER = "ravi@buyers.in"

VIP_CATEGORIES = [
    {"name": "General", "price": 4999, "total": 15000},
    {"name": "VIP", "price": 12000, "total": 5000},
]


def create_live_event(store, title="Sunburn Test Night", categories=None, price=0, total_tickets=0, rules=None):
    """Create and publish an event, optionally with a rule document."""
    payload = EventUpsert(
        title=title,
        starts_at=datetime(2026, 12, 27, 16, 0, tzinfo=timezone.utc),
        location="Vagator Beach, Goa",
        price=price,
        total_tickets=total_tickets,
        categories=categories
    )
    event, _ = CatalogService.upsert_event(store, payload)
    event = CatalogService.publish_event(store, event.id)
    if rules is not None:
        RuleService.save_rules(store, event.id, RulesUpdate(**rules))
    return event
