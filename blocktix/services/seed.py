import logging
import re
from datetime import datetime, timezone

from blocktix.models.event import EventStatus
from blocktix.schemas import Event, EventUpsert, RulesUpdate
from blocktix.services.catalog import apply_inventory
from blocktix.services.rules import RuleService
from blocktix.stores.base import TicketStore

logger = logging.getLogger(__name__)

SAMPLE_EVENTS = [
    {
        "title": "Sunburn Music Festival – Goa 2025",
        "location": "Vagator Beach, Goa",
        "date": "2025-12-27T16:00:00+05:30",
        "description": "Asia's biggest music festival in Goa. Experience top EDM artists over 3 days!",
        "image": "https://images.unsplash.com/photo-1506157786151-b8491531f063?q=80&w=1600&auto=format&fit=crop",
        "category": "Music",
        "isFeatured": True,
        "categories": [
            {"name": "General Pass (Per Day)", "price": 4999, "total": 15000},
            {"name": "VIP Pass (3 Days)", "price": 12000, "total": 5000},
        ],
        "rules": {"allowResale": True, "maxResalePriceMultiplier": 1.0},
    },
    {
        "title": "India vs Australia – T20 Match",
        "location": "M. Chinnaswamy Stadium, Bengaluru",
        "date": "2026-02-14T19:00:00+05:30",
        "description": "High-voltage India vs Australia T20 cricket match in Bengaluru! Limited seats.",
        "image": "https://images.news18.com/ibnlive/uploads/2023/09/india-australia-1st-odi-live-score-ind-vs-aus-2023-09-2502936abd62ce512f51496b9d397181-16x9.jpg",
        "category": "Sports",
        "isFeatured": True,
        "categories": [
            {"name": "Stand Tickets", "price": 1500, "total": 20000},
            {"name": "Premium Pavilion", "price": 4500, "total": 12000},
            {"name": "Corporate Box", "price": 12000, "total": 3000},
        ],
        "rules": {"maxTicketsPerWallet": 4, "allowResale": True, "maxResalePriceMultiplier": 1.2},
    },
    {
        "title": "Arijit Singh Live Concert",
        "location": "NSCI Dome, Mumbai",
        "date": "2026-01-10T18:30:00+05:30",
        "description": "An evening with Arijit Singh performing his best hits live at NSCI Dome.",
        "image": "https://www.tottenhamhotspurstadium.com/media/xrhfsdgm/2v8a4968.jpg",
        "category": "Concert",
        "isFeatured": False,
        "categories": [
            {"name": "Silver", "price": 1200, "total": 6000},
            {"name": "Gold", "price": 2500, "total": 3000},
            {"name": "Platinum", "price": 6000, "total": 1000},
        ],
        "rules": {"allowTransfer": False, "allowResale": True, "maxResalePriceMultiplier": 1.0},
    },
    {
        "title": "Ratha Yatra – Jagannath Puri Darshan Pass",
        "location": "Jagannath Temple, Puri, Odisha",
        "date": "2026-07-07T05:00:00+05:30",
        "description": "Special darshan passes for Ratha Yatra. General entry is free; priority darshan available.",
        "image": "https://i0.wp.com/indiacurrents.com/wp-content/uploads/2025/06/Puri-Jagannath-Rath-Yatra.jpg",
        "category": "Pilgrimage",
        "isFeatured": True,
        "categories": [
            {"name": "General Entry", "price": 0, "total": 90000},
            {"name": "Priority Darshan", "price": 500, "total": 10000},
        ],
        "rules": {"singleUse": True, "allowTransfer": False, "allowResale": False},
    },
    {
        "title": "Indian Tech Summit 2026",
        "location": "Pragati Maidan, New Delhi",
        "date": "2026-03-15T09:00:00+05:30",
        "description": "India's premier technology summit with talks, workshops, and networking over 3 days.",
        "image": "https://images.unsplash.com/photo-1531058020387-3be344556be6?q=80&w=1600&auto=format&fit=crop",
        "category": "Conference",
        "isFeatured": False,
        "categories": [
            {"name": "Student Pass", "price": 800, "total": 3000},
            {"name": "Regular", "price": 2000, "total": 4000},
            {"name": "VIP + Networking", "price": 5000, "total": 1000},
        ],
        "rules": {"allowResale": True, "maxResalePriceMultiplier": 1.0},
    },
]


def slugify(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def seed_sample_events(store: TicketStore) -> dict:
    """
    Upsert the sample events by (title, date), publish them and store
    their rules. New events get a slug id built from title and date.
    """
    now = datetime.now(timezone.utc)
    results = []

    for sample in SAMPLE_EVENTS:
        payload = EventUpsert.model_validate(sample)
        existing = store.find_event(payload.title, payload.starts_at)

        event = Event(
            id=existing.id if existing else slugify(f"{sample['title']}-{sample['date']}"),
            title=payload.title,
            description=payload.description,
            starts_at=payload.starts_at,
            location=payload.location,
            image_url=payload.image_url,
            category=payload.category or "general",
            is_featured=payload.is_featured,
            status=EventStatus.LIVE,
            created_at=existing.created_at if existing else now,
            updated_at=now,
            published_at=now
        )
        saved = store.save_event(apply_inventory(event, payload))
        RuleService.save_rules(store, saved.id, RulesUpdate.model_validate(sample["rules"]))

        result = {"id": saved.id, "title": saved.title}
        result["updated" if existing else "created"] = True
        results.append(result)

    logger.info(f"Seeded {len(results)} sample events")
    return {"ok": True, "count": len(results), "events": results}
