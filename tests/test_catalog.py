import pytest
from pydantic import ValidationError as PydanticValidationError

from blocktix.errors import NotFoundError, ValidationError
from blocktix.models.event import EventStatus
from blocktix.schemas import EventUpsert, RulesUpdate, TicketCategoryCreate
from blocktix.services.analytics import AnalyticsService
from blocktix.services.catalog import CatalogService, normalize_categories
from blocktix.services.inventory import InventoryService
from blocktix.services.rules import RuleService
from blocktix.services.seed import SAMPLE_EVENTS, seed_sample_events, slugify

from tests.helpers import BUYER, OTHER_BUYER, VIP_CATEGORIES, create_live_event


class TestUpsert:
    def test_create_derives_aggregates_from_categories(self, store):
        event, created = CatalogService.upsert_event(store, EventUpsert(
            title="Arijit Singh Live",
            categories=[
                {"name": " Silver ", "price": 1200, "total": 6000},
                {"name": "Gold", "price": 2500, "total": 3000, "available": 2500},
            ]
        ))

        assert created is True
        assert event.status == EventStatus.DRAFT
        assert event.price == 1200
        assert event.total_tickets == 9000
        assert event.available_tickets == 8500
        assert [c.name for c in event.categories] == ["Silver", "Gold"]
        assert event.categories[0].available == 6000

    def test_flat_event(self, store):
        event, _ = CatalogService.upsert_event(store, EventUpsert(title="Meetup", price=99, total_tickets=40))
        assert event.categories == []
        assert event.available_tickets == 40
        assert event.category == "general"

    def test_update_resets_to_draft(self, store, vip_event):
        event, created = CatalogService.upsert_event(store, EventUpsert(
            id=vip_event.id,
            title="Renamed",
            price=10,
            total_tickets=10
        ))

        assert created is False
        assert event.id == vip_event.id
        assert event.title == "Renamed"
        assert event.status == EventStatus.DRAFT
        assert CatalogService.list_live_events(store) == []

    def test_update_of_missing_event(self, store):
        with pytest.raises(NotFoundError):
            CatalogService.upsert_event(store, EventUpsert(id="nope", title="Ghost"))


class TestCategoryValidation:
    def _upsert(self, store, categories):
        return CatalogService.upsert_event(store, EventUpsert(title="Validated", categories=categories))

    def test_duplicate_names_ignoring_case(self, store):
        with pytest.raises(ValidationError, match="Duplicate category name"):
            self._upsert(store, [
                {"name": "VIP", "price": 100, "total": 5},
                {"name": " vip ", "price": 50, "total": 5},
            ])
        assert store.list_events() == []

    def test_empty_name(self, store):
        with pytest.raises(ValidationError, match="Category name required"):
            self._upsert(store, [{"name": "   ", "price": 100, "total": 5}])
        assert store.list_events() == []

    def test_available_above_total(self, store):
        with pytest.raises(ValidationError, match="Available must be between 0 and total"):
            self._upsert(store, [{"name": "Floor", "price": 10, "total": 2, "available": 50}])
        assert store.list_events() == []

    def test_available_equal_to_total_and_zero_are_allowed(self, store):
        event, _ = self._upsert(store, [
            {"name": "Floor", "price": 10, "total": 2, "available": 2},
            {"name": "Balcony", "price": 5, "total": 3, "available": 0},
        ])
        assert event.available_tickets == 2
        assert event.total_tickets == 5

    def test_negative_values_rejected_by_request_model(self):
        for bad in ({"price": -10}, {"total": -1}, {"available": -1}):
            with pytest.raises(PydanticValidationError):
                TicketCategoryCreate(name="Floor", **{"price": 10, "total": 2, **bad})

    def test_negative_price_rejected_by_catalog(self, store):
        category = TicketCategoryCreate.model_construct(name="Floor", price=-10, total=2, available=None)
        with pytest.raises(ValidationError, match="Invalid price or total"):
            normalize_categories([category])

    def test_purchase_after_validation_keeps_stores_consistent(self, store):
        event, _ = self._upsert(store, [
            {"name": "VIP", "price": 100, "total": 5},
            {"name": "General", "price": 50, "total": 5},
        ])
        CatalogService.publish_event(store, event.id)
        InventoryService.purchase(store, event.id, BUYER, category_name="vip")

        stored = store.get_event(event.id)
        assert [(c.name, c.available) for c in stored.categories] == [("VIP", 4), ("General", 5)]
        assert stored.available_tickets == sum(c.available for c in stored.categories)


class TestPublishAndDelete:
    def test_publish_sets_live_and_timestamp(self, store):
        event, _ = CatalogService.upsert_event(store, EventUpsert(title="Meetup", price=99, total_tickets=40))
        published = CatalogService.publish_event(store, event.id)

        assert published.status == EventStatus.LIVE
        assert published.published_at is not None
        assert [e.id for e in CatalogService.list_live_events(store)] == [event.id]

    def test_publish_missing_event(self, store):
        with pytest.raises(NotFoundError, match="Event not found"):
            CatalogService.publish_event(store, "nope")

    def test_delete_removes_event_and_rules(self, store, vip_event):
        RuleService.save_rules(store, vip_event.id, RulesUpdate(allow_resale=False))
        CatalogService.delete_event(store, vip_event.id)

        assert store.get_event(vip_event.id) is None
        assert store.get_rules(vip_event.id) is None


class TestSeed:
    def test_seed_creates_live_events_with_rules(self, store):
        result = seed_sample_events(store)

        assert result["ok"] is True
        assert result["count"] == len(SAMPLE_EVENTS)
        assert all(e.get("created") for e in result["events"])

        live = CatalogService.list_live_events(store)
        assert len(live) == len(SAMPLE_EVENTS)

        sunburn_id = slugify("Sunburn Music Festival – Goa 2025-2025-12-27T16:00:00+05:30")
        sunburn = store.get_event(sunburn_id)
        assert sunburn.price == 4999
        assert sunburn.total_tickets == 20000
        assert sunburn.find_category("VIP Pass (3 Days)").available == 5000

    def test_seed_is_idempotent_by_title_and_date(self, store):
        seed_sample_events(store)
        result = seed_sample_events(store)

        assert all(e.get("updated") for e in result["events"])
        assert len(store.list_events()) == len(SAMPLE_EVENTS)

    def test_seeded_rules(self, store):
        seed_sample_events(store)
        yatra = next(e for e in store.list_events() if e.title.startswith("Ratha Yatra"))
        rules = RuleService.get_rules(store, yatra.id)
        assert rules.single_use is True
        assert rules.allow_resale is False

    def test_slugify(self):
        assert slugify("India vs Australia – T20 Match") == "india-vs-australia-t20-match"


class TestAnalytics:
    def test_summary(self, store, vip_event):
        create_live_event(store, title="Meetup", price=99, total_tickets=40)
        InventoryService.purchase(store, vip_event.id, BUYER, quantity=2, category_name="VIP")

        summary = AnalyticsService.summary(store)
        assert summary.events == 2
        assert summary.total_tickets == 20040
        assert summary.sold_tickets == 2
        assert summary.remaining_tickets == 20038

    def test_empty_summary(self, store):
        summary = AnalyticsService.summary(store)
        assert summary.total_tickets == 0
        assert summary.sold_tickets == 0

    def test_category_breakdown(self, store, vip_event):
        InventoryService.purchase(store, vip_event.id, BUYER, quantity=2, category_name="VIP")
        InventoryService.purchase(store, vip_event.id, OTHER_BUYER, quantity=1, category_name="VIP")
        InventoryService.resell(store, vip_event.id, BUYER, OTHER_BUYER, 11000, category_name="VIP")
        InventoryService.transfer(store, vip_event.id, BUYER, OTHER_BUYER)

        rows = {r.category_name: r for r in AnalyticsService.category_breakdown(store)}
        vip = rows["VIP"]
        assert vip.purchases == 3
        assert vip.resales == 1
        assert vip.total_amount == 12000 * 3 + 11000
        assert rows[None].purchases == 0

    def test_recent_transactions_newest_first_and_limited(self, store):
        event = create_live_event(store, price=1, total_tickets=100)
        for _ in range(3):
            InventoryService.purchase(store, event.id, BUYER)
        InventoryService.transfer(store, event.id, BUYER, OTHER_BUYER)

        entries = AnalyticsService.recent_transactions(store, limit=2)
        assert len(entries) == 2
        assert entries[0].type.value == "transfer"
