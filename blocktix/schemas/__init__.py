from blocktix.schemas.event import (
    Event, TicketCategory, TicketCategoryCreate, EventUpsert, ResaleRules, RulesUpdate
)
from blocktix.schemas.ledger import (
    LedgerEntry, PurchaseRequest, PurchaseResponse, ResellRequest, TransferRequest,
    CategoryBreakdown, AnalyticsSummary
)
from blocktix.schemas.access import AccessList, AccessListCreate
from blocktix.schemas.user import (
    UserCreate, User, SignupResponse, ContactCreate, ContactSubmission,
    OtpSendRequest, OtpVerifyRequest
)

__all__ = [
    "Event", "TicketCategory", "TicketCategoryCreate", "EventUpsert", "ResaleRules", "RulesUpdate",
    "LedgerEntry", "PurchaseRequest", "PurchaseResponse", "ResellRequest", "TransferRequest",
    "CategoryBreakdown", "AnalyticsSummary",
    "AccessList", "AccessListCreate",
    "UserCreate", "User", "SignupResponse", "ContactCreate", "ContactSubmission",
    "OtpSendRequest", "OtpVerifyRequest"
]
