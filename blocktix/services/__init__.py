from blocktix.services.access import AccessService
from blocktix.services.rules import RuleService
from blocktix.services.inventory import InventoryService, PurchaseResult
from blocktix.services.catalog import CatalogService
from blocktix.services.analytics import AnalyticsService
from blocktix.services.auth import AuthService
from blocktix.services.email import EmailService
from blocktix.services.otp import OtpService, OtpStore

__all__ = [
    "AccessService", "RuleService", "InventoryService", "PurchaseResult", "CatalogService",
    "AnalyticsService", "AuthService", "EmailService", "OtpService", "OtpStore"
]
