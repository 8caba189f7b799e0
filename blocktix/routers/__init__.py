from blocktix.routers.events import router as events_router
from blocktix.routers.tickets import router as tickets_router
from blocktix.routers.orders import router as orders_router
from blocktix.routers.admin import router as admin_router
from blocktix.routers.auth import router as auth_router
from blocktix.routers.accounts import router as accounts_router

__all__ = [
    "events_router",
    "tickets_router",
    "orders_router",
    "admin_router",
    "auth_router",
    "accounts_router"
]
