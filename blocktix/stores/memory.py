"""In-process store used in dev mode and tests."""

import threading
import uuid
from collections import defaultdict
from datetime import datetime, timezone
from typing import Optional

from blocktix.models.access_list import AccessListKind
from blocktix.models.event import EventStatus
from blocktix.models.ledger import LedgerEntryType
from blocktix.schemas import (
    AccessList, CategoryBreakdown, ContactSubmission, Event, LedgerEntry, ResaleRules, User
)
from blocktix.stores.base import TicketStore


def _key(wallet: str) -> str:
    return wallet.strip().lower()


class InMemoryTicketStore(TicketStore):
    """Dict-backed store. Every read and write happens under one lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._events: dict[str, Event] = {}
        self._rules: dict[str, ResaleRules] = {}
        self._entries: list[LedgerEntry] = []
        self._orders: dict[str, LedgerEntry] = {}
        self._purchases: dict[str, list[LedgerEntry]] = defaultdict(list)
        self._access_lists: list[AccessList] = []
        self._listed: dict[AccessListKind, set[str]] = defaultdict(set)
        self._users: dict[str, User] = {}
        self._password_hashes: dict[str, str] = {}
        self._contacts: list[ContactSubmission] = []
        self._next_id = 1

    def _new_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def list_events(self, status: Optional[EventStatus] = None) -> list[Event]:
        with self._lock:
            return [
                e.model_copy(deep=True) for e in self._events.values()
                if status is None or e.status == status
            ]

    def get_event(self, event_id: str) -> Optional[Event]:
        with self._lock:
            event = self._events.get(event_id)
            return event.model_copy(deep=True) if event else None

    def find_event(self, title: str, starts_at: Optional[datetime]) -> Optional[Event]:
        with self._lock:
            for event in self._events.values():
                if event.title == title and event.starts_at == starts_at:
                    return event.model_copy(deep=True)
        return None

    def save_event(self, event: Event) -> Event:
        with self._lock:
            stored = event.model_copy(deep=True)
            if not stored.id:
                stored.id = uuid.uuid4().hex
            self._events[stored.id] = stored
            return stored.model_copy(deep=True)

    def delete_event(self, event_id: str) -> None:
        with self._lock:
            self._events.pop(event_id, None)
            self._rules.pop(event_id, None)

    def reserve_tickets(self, event_id: str, quantity: int, category_name: Optional[str] = None) -> bool:
        with self._lock:
            event = self._events.get(event_id)
            if event is None:
                return False

            updated = event.model_copy(deep=True)
            if category_name is not None:
                category = updated.find_category(category_name)
                if category is None or category.available < quantity:
                    return False
                category.available -= quantity
                updated.available_tickets -= quantity
            else:
                if updated.available_tickets < quantity:
                    return False
                updated.available_tickets -= quantity

            updated.updated_at = datetime.now(timezone.utc)
            self._events[event_id] = updated
            return True

    def get_rules(self, event_id: str) -> Optional[ResaleRules]:
        with self._lock:
            rules = self._rules.get(event_id)
            return rules.model_copy() if rules else None

    def save_rules(self, rules: ResaleRules) -> ResaleRules:
        with self._lock:
            self._rules[rules.event_id] = rules.model_copy()
            return rules.model_copy()

    def append_entry(self, entry: LedgerEntry) -> LedgerEntry:
        with self._lock:
            if entry.order_id and entry.order_id in self._orders:
                raise ValueError(f"Duplicate order id {entry.order_id}")
            stored = entry.model_copy(update={"id": self._new_id()})
            self._entries.append(stored)
            if stored.order_id:
                self._orders[stored.order_id] = stored
            if stored.type == LedgerEntryType.PURCHASE and stored.to_wallet:
                self._purchases[_key(stored.to_wallet)].append(stored)
            return stored.model_copy()

    def purchased_quantity(self, event_id: str, wallet: str) -> int:
        with self._lock:
            return sum(
                e.quantity or 0 for e in self._purchases.get(_key(wallet), [])
                if e.event_id == event_id
            )

    def list_purchases(self, wallet: str) -> list[LedgerEntry]:
        with self._lock:
            return [e.model_copy() for e in reversed(self._purchases.get(_key(wallet), []))]

    def get_entry_by_order_id(self, order_id: str) -> Optional[LedgerEntry]:
        with self._lock:
            entry = self._orders.get(order_id)
            return entry.model_copy() if entry else None

    def list_entries(self, limit: int) -> list[LedgerEntry]:
        with self._lock:
            return [e.model_copy() for e in reversed(self._entries[-limit:])] if limit > 0 else []

    def category_breakdown(self) -> list[CategoryBreakdown]:
        with self._lock:
            rows: dict[tuple, CategoryBreakdown] = {}
            for entry in self._entries:
                key = (entry.event_id, entry.category_name)
                row = rows.get(key)
                if row is None:
                    row = rows[key] = CategoryBreakdown(
                        event_id=entry.event_id,
                        category_name=entry.category_name
                    )
                if entry.type == LedgerEntryType.PURCHASE:
                    row.purchases += entry.quantity or 1
                elif entry.type == LedgerEntryType.RESELL:
                    row.resales += 1
                row.total_amount += entry.amount or 0
            return sorted(rows.values(), key=lambda r: (r.event_id, r.category_name or ""))

    def add_access_list(self, kind: AccessListKind, wallets: list[str]) -> AccessList:
        with self._lock:
            access_list = AccessList(
                id=self._new_id(),
                kind=kind,
                wallets=list(wallets),
                created_at=datetime.now(timezone.utc)
            )
            self._access_lists.append(access_list)
            self._listed[kind].update(_key(w) for w in wallets)
            return access_list.model_copy()

    def has_access_list(self, kind: AccessListKind) -> bool:
        with self._lock:
            return any(a.kind == kind for a in self._access_lists)

    def is_listed(self, kind: AccessListKind, wallet: str) -> bool:
        with self._lock:
            return _key(wallet) in self._listed[kind]

    def create_user(self, name: str, email: str, hashed_password: str) -> User:
        with self._lock:
            if _key(email) in self._users:
                raise ValueError(f"Duplicate email {email}")
            user = User(
                id=self._new_id(),
                name=name,
                email=email,
                created_at=datetime.now(timezone.utc)
            )
            self._users[_key(email)] = user
            self._password_hashes[_key(email)] = hashed_password
            return user.model_copy()

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(_key(email))
            return user.model_copy() if user else None

    def add_contact_submission(self, submission: ContactSubmission) -> ContactSubmission:
        with self._lock:
            stored = submission.model_copy(update={"id": self._new_id()})
            self._contacts.append(stored)
            return stored.model_copy()
