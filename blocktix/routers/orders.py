from typing import Optional

from fastapi import APIRouter, Depends, Query

from blocktix.database import get_store
from blocktix.schemas import LedgerEntry
from blocktix.services.inventory import InventoryService
from blocktix.stores.base import TicketStore

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=list[LedgerEntry])
async def list_orders(
    email: Optional[str] = Query(None),
    store: TicketStore = Depends(get_store)
):
    return InventoryService.list_orders(store, email)


@router.get("/{order_id}", response_model=LedgerEntry)
async def get_order(order_id: str, store: TicketStore = Depends(get_store)):
    return InventoryService.get_order(store, order_id)
