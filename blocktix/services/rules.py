from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from blocktix.errors import ValidationError
from blocktix.schemas import ResaleRules, RulesUpdate
from blocktix.stores.base import TicketStore


class RuleService:
    @staticmethod
    def get_rules(store: TicketStore, event_id: str) -> ResaleRules:
        """Stored rules for the event, or the permissive defaults."""
        rules = store.get_rules(event_id)
        if rules is None:
            return ResaleRules(event_id=event_id)
        return rules

    @staticmethod
    def save_rules(store: TicketStore, event_id: str, update: RulesUpdate) -> ResaleRules:
        rules = ResaleRules(
            event_id=event_id,
            updated_at=datetime.now(timezone.utc),
            **update.model_dump()
        )
        return store.save_rules(rules)

    @staticmethod
    def wallet_cap(rules: ResaleRules) -> Optional[int]:
        """Tickets one wallet may hold for the event, None when unlimited."""
        if rules.single_use:
            return 1
        if rules.max_tickets_per_wallet and rules.max_tickets_per_wallet > 0:
            return rules.max_tickets_per_wallet
        return None

    @staticmethod
    def check_purchase_cap(rules: ResaleRules, prior_quantity: int, requested: int) -> None:
        if rules.single_use and requested > 1:
            raise ValidationError("Only one pass allowed per user")
        cap = RuleService.wallet_cap(rules)
        if cap is not None and prior_quantity + requested > cap:
            raise ValidationError(f"Limit exceeded: max {cap} per user")

    @staticmethod
    def check_resale_price(rules: ResaleRules, base_price: float, asked_price: float) -> None:
        if not rules.allow_resale:
            raise ValidationError("Resale disabled")
        # Decimal of the printed values, so 1999.99 * 1.15 is exactly 2299.9885
        max_price = Decimal(str(base_price)) * Decimal(str(rules.max_resale_price_multiplier))
        if Decimal(str(asked_price)) > max_price:
            raise ValidationError("Price exceeds allowed maximum")

    @staticmethod
    def check_transfer(rules: ResaleRules) -> None:
        if not rules.allow_transfer:
            raise ValidationError("Transfer disabled")
