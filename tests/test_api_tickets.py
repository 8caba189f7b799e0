import pytest

from blocktix.models.access_list import AccessListKind
from blocktix.schemas import EventUpsert
from blocktix.services.access import AccessService
from blocktix.services.catalog import CatalogService

from tests.helpers import BUYER, OTHER_BUYER, VIP_CATEGORIES, create_live_event


@pytest.fixture
def event(memory_store):
    return create_live_event(memory_store, categories=VIP_CATEGORIES)


class TestEventsAPI:
    def test_lists_only_live_events(self, client, memory_store, event):
        CatalogService.upsert_event(memory_store, EventUpsert(title="Draft only", price=1, total_tickets=1))

        response = client.get("/events")
        assert response.status_code == 200
        assert [e["id"] for e in response.json()] == [event.id]

    def test_event_uses_camel_case(self, client, event):
        data = client.get(f"/events/{event.id}").json()

        assert data["title"] == "Sunburn Test Night"
        assert data["status"] == "live"
        assert data["availableTickets"] == 20000
        assert data["totalTickets"] == 20000
        assert data["date"].startswith("2026-12-27T16:00:00")
        assert {"name": "VIP", "price": 12000, "total": 5000, "available": 5000} in data["categories"]

    def test_missing_event(self, client):
        response = client.get("/events/nope")
        assert response.status_code == 404
        assert response.json() == {"message": "Event not found"}

    def test_security_headers(self, client):
        response = client.get("/events")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestPurchaseAPI:
    def test_vip_purchase_decrements_category(self, client, event):
        response = client.post("/purchase", json={
            "eventId": event.id,
            "wallet": BUYER,
            "quantity": 2,
            "categoryName": "VIP"
        })

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["orderId"].startswith("ORD-")

        data = client.get(f"/events/{event.id}").json()
        vip = next(c for c in data["categories"] if c["name"] == "VIP")
        assert vip["available"] == 4998
        assert data["availableTickets"] == 19998

    def test_order_ids_are_unique(self, client, event):
        payload = {"eventId": event.id, "wallet": BUYER, "categoryName": "VIP"}
        first = client.post("/purchase", json=payload).json()["orderId"]
        second = client.post("/purchase", json=payload).json()["orderId"]
        assert first != second

    def test_over_availability(self, client, memory_store):
        small = create_live_event(memory_store, title="Tiny", categories=[{"name": "Box", "price": 1, "total": 2}])
        response = client.post("/purchase", json={
            "eventId": small.id, "wallet": BUYER, "quantity": 3, "categoryName": "Box"
        })
        assert response.status_code == 400
        assert response.json() == {"message": "Not enough category tickets available"}

    def test_missing_fields_are_rejected(self, client):
        response = client.post("/purchase", json={"wallet": BUYER})
        assert response.status_code == 400
        assert "eventId" in response.json()["message"]

    def test_zero_quantity_is_rejected(self, client, event):
        response = client.post("/purchase", json={
            "eventId": event.id, "wallet": BUYER, "quantity": 0, "categoryName": "VIP"
        })
        assert response.status_code == 400

    def test_blacklisted_wallet(self, client, memory_store, event):
        AccessService.add_list(memory_store, AccessListKind.WHITELIST, [BUYER])
        AccessService.add_list(memory_store, AccessListKind.BLACKLIST, [BUYER])

        response = client.post("/purchase", json={"eventId": event.id, "wallet": BUYER, "categoryName": "VIP"})
        assert response.status_code == 403
        assert response.json() == {"message": "Wallet blacklisted"}


class TestResellTransferAPI:
    def test_resell(self, client, event):
        response = client.post("/resell", json={
            "eventId": event.id, "seller": BUYER, "buyer": OTHER_BUYER,
            "price": 12000, "categoryName": "VIP"
        })
        assert response.status_code == 201
        assert response.json() == {"success": True}

    def test_resell_above_cap(self, client, event):
        response = client.post("/resell", json={
            "eventId": event.id, "seller": BUYER, "buyer": OTHER_BUYER,
            "price": 12001, "categoryName": "VIP"
        })
        assert response.status_code == 400
        assert response.json() == {"message": "Price exceeds allowed maximum"}

    def test_transfer_uses_from_and_to(self, client, event):
        response = client.post("/transfer", json={"eventId": event.id, "from": BUYER, "to": OTHER_BUYER})
        assert response.status_code == 201

    def test_transfer_with_blacklisted_receiver(self, client, memory_store, event):
        AccessService.add_list(memory_store, AccessListKind.BLACKLIST, [OTHER_BUYER])
        response = client.post("/transfer", json={"eventId": event.id, "from": BUYER, "to": OTHER_BUYER})
        assert response.status_code == 403


class TestOrdersAPI:
    def test_order_lookup_returns_stored_entry(self, client, event):
        order_id = client.post("/purchase", json={
            "eventId": event.id, "wallet": BUYER, "quantity": 2, "categoryName": "VIP"
        }).json()["orderId"]

        response = client.get(f"/orders/{order_id}")
        assert response.status_code == 200
        entry = response.json()
        assert entry["orderId"] == order_id
        assert entry["type"] == "purchase"
        assert entry["eventId"] == event.id
        assert entry["from"] is None
        assert entry["to"] == BUYER
        assert entry["quantity"] == 2
        assert entry["categoryName"] == "VIP"
        assert entry["amount"] == 24000

    def test_missing_order(self, client):
        response = client.get("/orders/ORD-1-missing")
        assert response.status_code == 404
        assert response.json() == {"message": "Order not found"}

    def test_orders_by_email(self, client, event):
        client.post("/purchase", json={"eventId": event.id, "wallet": BUYER, "categoryName": "VIP"})
        client.post("/purchase", json={"eventId": event.id, "wallet": OTHER_BUYER, "categoryName": "VIP"})

        orders = client.get("/orders", params={"email": BUYER.upper()}).json()
        assert len(orders) == 1
        assert orders[0]["to"] == BUYER

    def test_orders_without_email(self, client):
        response = client.get("/orders")
        assert response.status_code == 400
        assert response.json() == {"message": "email query param required"}
