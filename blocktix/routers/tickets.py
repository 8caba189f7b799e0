from fastapi import APIRouter, BackgroundTasks, Depends, status

from blocktix.config import Settings, get_settings
from blocktix.database import get_store
from blocktix.schemas import PurchaseRequest, PurchaseResponse, ResellRequest, TransferRequest
from blocktix.services.email import EmailService
from blocktix.services.inventory import InventoryService
from blocktix.stores.base import TicketStore

router = APIRouter(tags=["tickets"])


@router.post("/purchase", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
async def purchase_tickets(
    payload: PurchaseRequest,
    background_tasks: BackgroundTasks,
    store: TicketStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    result = InventoryService.purchase(
        store,
        payload.event_id,
        payload.wallet,
        quantity=payload.quantity,
        category_name=payload.category_name,
        unit_price=payload.price
    )

    # Receipt goes out after the response; a failed send never fails the sale
    background_tasks.add_task(
        EmailService.send_ticket_receipt,
        settings,
        payload.wallet,
        result.event.title,
        result.event.starts_at,
        result.event.location,
        payload.quantity,
        result.entry.category_name,
        result.entry.order_id,
        result.entry.amount or 0
    )

    return PurchaseResponse(order_id=result.entry.order_id)


@router.post("/resell", status_code=status.HTTP_201_CREATED)
async def resell_ticket(payload: ResellRequest, store: TicketStore = Depends(get_store)):
    InventoryService.resell(
        store,
        payload.event_id,
        payload.seller,
        payload.buyer,
        payload.price,
        category_name=payload.category_name
    )
    return {"success": True}


@router.post("/transfer", status_code=status.HTTP_201_CREATED)
async def transfer_ticket(payload: TransferRequest, store: TicketStore = Depends(get_store)):
    InventoryService.transfer(store, payload.event_id, payload.from_wallet, payload.to_wallet)
    return {"success": True}
