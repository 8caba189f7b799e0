from blocktix.schemas import AnalyticsSummary, CategoryBreakdown, LedgerEntry
from blocktix.stores.base import TicketStore

RECENT_TRANSACTIONS_LIMIT = 50


class AnalyticsService:
    @staticmethod
    def summary(store: TicketStore) -> AnalyticsSummary:
        events = store.list_events()
        total = sum(e.total_tickets for e in events)
        remaining = sum(e.available_tickets for e in events)
        return AnalyticsSummary(
            total_tickets=total,
            sold_tickets=max(0, total - remaining),
            remaining_tickets=remaining,
            events=len(events)
        )

    @staticmethod
    def recent_transactions(store: TicketStore, limit: int = RECENT_TRANSACTIONS_LIMIT) -> list[LedgerEntry]:
        return store.list_entries(limit)

    @staticmethod
    def category_breakdown(store: TicketStore) -> list[CategoryBreakdown]:
        return store.category_breakdown()
