import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from blocktix.errors import NotFoundError, ValidationError
from blocktix.models.event import EventStatus
from blocktix.models.ledger import LedgerEntryType
from blocktix.schemas import Event, LedgerEntry
from blocktix.services.access import AccessService
from blocktix.services.rules import RuleService
from blocktix.stores.base import TicketStore

logger = logging.getLogger(__name__)

NOT_ENOUGH_TICKETS = "Not enough tickets available"
NOT_ENOUGH_CATEGORY_TICKETS = "Not enough category tickets available"


@dataclass
class PurchaseResult:
    entry: LedgerEntry
    event: Event


class InventoryService:
    @staticmethod
    def new_order_id() -> str:
        return f"ORD-{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}"

    @staticmethod
    def purchase(
        store: TicketStore,
        event_id: str,
        wallet: str,
        quantity: int = 1,
        category_name: Optional[str] = None,
        unit_price: Optional[float] = None
    ) -> PurchaseResult:
        """
        Sell tickets for a live event and record the purchase in the ledger.
        Events with categories sell per category; otherwise the flat
        availability is used. Stock is taken with an atomic conditional
        decrement, so a sale never proceeds once availability is exhausted.
        """
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        AccessService.ensure_authorized(store, wallet)

        event = store.get_event(event_id)
        if event is None:
            raise NotFoundError("Event not found")
        if event.status != EventStatus.LIVE:
            raise ValidationError("Event not live")

        category = None
        if event.categories:
            if not category_name:
                raise ValidationError("categoryName required")
            category = event.find_category(category_name)
            if category is None:
                raise ValidationError("Category not found")
            if category.available < quantity:
                raise ValidationError(NOT_ENOUGH_CATEGORY_TICKETS)
            base_price = category.price
        else:
            if event.available_tickets < quantity:
                raise ValidationError(NOT_ENOUGH_TICKETS)
            base_price = event.price

        rules = RuleService.get_rules(store, event_id)
        prior = 0
        if RuleService.wallet_cap(rules) is not None:
            prior = store.purchased_quantity(event_id, wallet)
        RuleService.check_purchase_cap(rules, prior, quantity)

        reserved = store.reserve_tickets(event_id, quantity, category.name if category else None)
        if not reserved:
            logger.info(f"Lost stock race on event {event_id} for {wallet}")
            raise ValidationError(NOT_ENOUGH_CATEGORY_TICKETS if category else NOT_ENOUGH_TICKETS)

        price = unit_price if unit_price is not None else base_price
        entry = store.append_entry(LedgerEntry(
            type=LedgerEntryType.PURCHASE,
            event_id=event_id,
            from_wallet=None,
            to_wallet=wallet,
            amount=price * quantity,
            quantity=quantity,
            category_name=category.name if category else None,
            timestamp=datetime.now(timezone.utc),
            order_id=InventoryService.new_order_id()
        ))

        logger.info(
            f"Order {entry.order_id}: {quantity} ticket(s) for event {event_id} "
            f"({entry.category_name or 'general'}) to {wallet}"
        )
        return PurchaseResult(entry=entry, event=event)

    @staticmethod
    def resell(
        store: TicketStore,
        event_id: str,
        seller: str,
        buyer: str,
        price: float,
        category_name: Optional[str] = None
    ) -> LedgerEntry:
        """
        Record the resale of an already-sold ticket. Availability counts are
        not touched; the asking price is capped by the event's rules.
        """
        AccessService.ensure_authorized(store, seller, buyer)

        event = store.get_event(event_id)
        if event is None:
            raise NotFoundError("Event not found")

        category = None
        base_price = event.price
        if event.categories and category_name:
            category = event.find_category(category_name)
            if category is None:
                raise ValidationError("Category not found")
            base_price = category.price

        rules = RuleService.get_rules(store, event_id)
        RuleService.check_resale_price(rules, base_price, price)

        entry = store.append_entry(LedgerEntry(
            type=LedgerEntryType.RESELL,
            event_id=event_id,
            from_wallet=seller,
            to_wallet=buyer,
            amount=price,
            category_name=category.name if category else None,
            timestamp=datetime.now(timezone.utc)
        ))
        logger.info(f"Resale on event {event_id}: {seller} -> {buyer} at {price}")
        return entry

    @staticmethod
    def transfer(store: TicketStore, event_id: str, from_wallet: str, to_wallet: str) -> LedgerEntry:
        AccessService.ensure_authorized(store, from_wallet, to_wallet)

        rules = RuleService.get_rules(store, event_id)
        RuleService.check_transfer(rules)

        entry = store.append_entry(LedgerEntry(
            type=LedgerEntryType.TRANSFER,
            event_id=event_id,
            from_wallet=from_wallet,
            to_wallet=to_wallet,
            timestamp=datetime.now(timezone.utc)
        ))
        logger.info(f"Transfer on event {event_id}: {from_wallet} -> {to_wallet}")
        return entry

    @staticmethod
    def list_orders(store: TicketStore, email: Optional[str]) -> list[LedgerEntry]:
        """Purchase history of an email address, newest first."""
        email = (email or "").strip().lower()
        if not email:
            raise ValidationError("email query param required")
        return store.list_purchases(email)

    @staticmethod
    def get_order(store: TicketStore, order_id: str) -> LedgerEntry:
        entry = store.get_entry_by_order_id(order_id)
        if entry is None:
            raise NotFoundError("Order not found")
        return entry
