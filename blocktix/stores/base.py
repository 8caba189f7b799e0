"""Store interface (repository pattern).

Services depend only on this interface. Implementations must be swappable
and return the pydantic records from ``blocktix.schemas``, never ORM rows.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from blocktix.models.access_list import AccessListKind
from blocktix.models.event import EventStatus
from blocktix.schemas import (
    AccessList, CategoryBreakdown, ContactSubmission, Event, LedgerEntry, ResaleRules, User
)


class TicketStore(ABC):
    """Persistence for events, rules, the ledger, access lists and accounts."""

    # Events

    @abstractmethod
    def list_events(self, status: Optional[EventStatus] = None) -> list[Event]:
        """Return events, optionally only those with the given status."""
        ...

    @abstractmethod
    def get_event(self, event_id: str) -> Optional[Event]:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def find_event(self, title: str, starts_at: Optional[datetime]) -> Optional[Event]:
        """Return the event with this title and start time, or None."""
        ...

    @abstractmethod
    def save_event(self, event: Event) -> Event:
        """Insert or fully replace an event, categories included.

        An event without an ID gets a new one.
        """
        ...

    @abstractmethod
    def delete_event(self, event_id: str) -> None:
        """Delete an event and its rules. Missing events are ignored."""
        ...

    @abstractmethod
    def reserve_tickets(self, event_id: str, quantity: int, category_name: Optional[str] = None) -> bool:
        """Atomically take ``quantity`` tickets out of stock.

        With ``category_name`` the category's ``available`` and the event's
        ``available_tickets`` both drop by ``quantity``; without it only the
        event's flat count does. Nothing changes and False is returned when
        fewer than ``quantity`` tickets are left.
        """
        ...

    # Rules

    @abstractmethod
    def get_rules(self, event_id: str) -> Optional[ResaleRules]:
        ...

    @abstractmethod
    def save_rules(self, rules: ResaleRules) -> ResaleRules:
        """Replace the rule document stored for ``rules.event_id``."""
        ...

    # Ledger

    @abstractmethod
    def append_entry(self, entry: LedgerEntry) -> LedgerEntry:
        """Append a ledger entry and return it with its ID assigned."""
        ...

    @abstractmethod
    def purchased_quantity(self, event_id: str, wallet: str) -> int:
        """Sum of quantities the wallet bought for the event (case-insensitive)."""
        ...

    @abstractmethod
    def list_purchases(self, wallet: str) -> list[LedgerEntry]:
        """Purchase entries delivered to the wallet, newest first."""
        ...

    @abstractmethod
    def get_entry_by_order_id(self, order_id: str) -> Optional[LedgerEntry]:
        ...

    @abstractmethod
    def list_entries(self, limit: int) -> list[LedgerEntry]:
        """Most recent ledger entries, newest first."""
        ...

    @abstractmethod
    def category_breakdown(self) -> list[CategoryBreakdown]:
        """Aggregate the ledger per (event, category)."""
        ...

    # Access lists

    @abstractmethod
    def add_access_list(self, kind: AccessListKind, wallets: list[str]) -> AccessList:
        ...

    @abstractmethod
    def has_access_list(self, kind: AccessListKind) -> bool:
        """True once at least one list of this kind exists, even an empty one."""
        ...

    @abstractmethod
    def is_listed(self, kind: AccessListKind, wallet: str) -> bool:
        """Case-insensitive membership in any list of this kind."""
        ...

    # Accounts

    @abstractmethod
    def create_user(self, name: str, email: str, hashed_password: str) -> User:
        ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def add_contact_submission(self, submission: ContactSubmission) -> ContactSubmission:
        ...
