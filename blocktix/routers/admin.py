from fastapi import APIRouter, Depends, Response, status

from blocktix.database import get_store
from blocktix.models.access_list import AccessListKind
from blocktix.schemas import (
    AccessList, AccessListCreate, AnalyticsSummary, CategoryBreakdown, Event, EventUpsert,
    LedgerEntry, ResaleRules, RulesUpdate
)
from blocktix.services.access import AccessService
from blocktix.services.analytics import AnalyticsService
from blocktix.services.auth import require_admin_key
from blocktix.services.catalog import CatalogService
from blocktix.services.rules import RuleService
from blocktix.services.seed import seed_sample_events
from blocktix.stores.base import TicketStore

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin_key)])


@router.post("/events", response_model=Event)
async def upsert_event(
    payload: EventUpsert,
    response: Response,
    store: TicketStore = Depends(get_store)
):
    event, created = CatalogService.upsert_event(store, payload)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return event


@router.post("/events/{event_id}/publish", response_model=Event)
async def publish_event(event_id: str, store: TicketStore = Depends(get_store)):
    return CatalogService.publish_event(store, event_id)


@router.delete("/events/{event_id}")
async def delete_event(event_id: str, store: TicketStore = Depends(get_store)):
    CatalogService.delete_event(store, event_id)
    return {"success": True}


@router.put("/events/{event_id}/rules", response_model=ResaleRules)
async def update_rules(
    event_id: str,
    payload: RulesUpdate,
    store: TicketStore = Depends(get_store)
):
    return RuleService.save_rules(store, event_id, payload)


@router.post("/whitelist", response_model=AccessList, status_code=status.HTTP_201_CREATED)
async def add_whitelist(payload: AccessListCreate, store: TicketStore = Depends(get_store)):
    return AccessService.add_list(store, AccessListKind.WHITELIST, payload.wallets)


@router.post("/blacklist", response_model=AccessList, status_code=status.HTTP_201_CREATED)
async def add_blacklist(payload: AccessListCreate, store: TicketStore = Depends(get_store)):
    return AccessService.add_list(store, AccessListKind.BLACKLIST, payload.wallets)


@router.post("/seed/sample")
async def seed_sample(store: TicketStore = Depends(get_store)):
    return seed_sample_events(store)


@router.get("/analytics/summary", response_model=AnalyticsSummary)
async def analytics_summary(store: TicketStore = Depends(get_store)):
    return AnalyticsService.summary(store)


@router.get("/analytics/transactions", response_model=list[LedgerEntry])
async def analytics_transactions(store: TicketStore = Depends(get_store)):
    return AnalyticsService.recent_transactions(store)


@router.get("/analytics/categories", response_model=list[CategoryBreakdown])
async def analytics_categories(store: TicketStore = Depends(get_store)):
    return AnalyticsService.category_breakdown(store)
