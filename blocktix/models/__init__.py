from blocktix.models.event import Event, EventStatus, TicketCategory, ResaleRule
from blocktix.models.ledger import LedgerEntry, LedgerEntryType
from blocktix.models.access_list import AccessList, AccessListEntry, AccessListKind
from blocktix.models.user import User, ContactSubmission

__all__ = [
    "Event", "EventStatus", "TicketCategory", "ResaleRule",
    "LedgerEntry", "LedgerEntryType",
    "AccessList", "AccessListEntry", "AccessListKind",
    "User", "ContactSubmission"
]
