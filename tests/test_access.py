import pytest

from blocktix.errors import AuthorizationError
from blocktix.models.access_list import AccessListKind
from blocktix.services.access import AccessService

from tests.helpers import BUYER, OTHER_BUYER


class TestAccessLists:
    def test_everyone_allowed_without_lists(self, store):
        assert AccessService.is_authorized(store, BUYER)
        AccessService.ensure_authorized(store, BUYER, OTHER_BUYER)

    def test_whitelist_restricts_to_members(self, store):
        AccessService.add_list(store, AccessListKind.WHITELIST, [BUYER])

        assert AccessService.is_authorized(store, BUYER)
        assert not AccessService.is_authorized(store, OTHER_BUYER)
        with pytest.raises(AuthorizationError, match="Wallet not whitelisted"):
            AccessService.ensure_authorized(store, BUYER, OTHER_BUYER)

    def test_blacklist_beats_whitelist(self, store):
        AccessService.add_list(store, AccessListKind.WHITELIST, [BUYER])
        AccessService.add_list(store, AccessListKind.BLACKLIST, [BUYER])

        assert not AccessService.is_authorized(store, BUYER)
        with pytest.raises(AuthorizationError, match="Wallet blacklisted"):
            AccessService.ensure_authorized(store, BUYER)

    def test_membership_is_union_of_lists(self, store):
        AccessService.add_list(store, AccessListKind.WHITELIST, [BUYER])
        AccessService.add_list(store, AccessListKind.WHITELIST, [OTHER_BUYER])
        AccessService.ensure_authorized(store, BUYER, OTHER_BUYER)

    def test_membership_ignores_case_and_whitespace(self, store):
        AccessService.add_list(store, AccessListKind.BLACKLIST, ["  ASHA@Buyers.IN "])
        assert not AccessService.is_authorized(store, BUYER)

    def test_add_list_drops_blank_wallets(self, store):
        access_list = AccessService.add_list(store, AccessListKind.BLACKLIST, ["", "  ", " 0xabc "])
        assert access_list.id is not None
        assert access_list.wallets == ["0xabc"]
