from fastapi import APIRouter, Depends

from blocktix.database import get_store
from blocktix.schemas import Event
from blocktix.services.catalog import CatalogService
from blocktix.stores.base import TicketStore

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=list[Event])
async def list_events(store: TicketStore = Depends(get_store)):
    return CatalogService.list_live_events(store)


@router.get("/{event_id}", response_model=Event)
async def get_event(event_id: str, store: TicketStore = Depends(get_store)):
    return CatalogService.get_event(store, event_id)
