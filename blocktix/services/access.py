import logging

from blocktix.errors import AuthorizationError
from blocktix.models.access_list import AccessListKind
from blocktix.schemas import AccessList
from blocktix.stores.base import TicketStore

logger = logging.getLogger(__name__)


class AccessService:
    @staticmethod
    def is_authorized(store: TicketStore, wallet: str) -> bool:
        """
        A blacklisted wallet is always rejected. Once any whitelist exists,
        only wallets on a whitelist are accepted.
        """
        if store.is_listed(AccessListKind.BLACKLIST, wallet):
            return False
        if not store.has_access_list(AccessListKind.WHITELIST):
            return True
        return store.is_listed(AccessListKind.WHITELIST, wallet)

    @staticmethod
    def ensure_authorized(store: TicketStore, *wallets: str) -> None:
        """Raise AuthorizationError for the first wallet that may not trade."""
        for wallet in wallets:
            if store.is_listed(AccessListKind.BLACKLIST, wallet):
                logger.info(f"Rejected blacklisted wallet {wallet}")
                raise AuthorizationError("Wallet blacklisted")

        if not store.has_access_list(AccessListKind.WHITELIST):
            return

        for wallet in wallets:
            if not store.is_listed(AccessListKind.WHITELIST, wallet):
                logger.info(f"Rejected wallet {wallet}: not whitelisted")
                raise AuthorizationError("Wallet not whitelisted")

    @staticmethod
    def add_list(store: TicketStore, kind: AccessListKind, wallets: list[str]) -> AccessList:
        cleaned = [w.strip() for w in wallets if w and w.strip()]
        access_list = store.add_access_list(kind, cleaned)
        logger.info(f"Stored {kind.value} {access_list.id} with {len(cleaned)} wallet(s)")
        return access_list
