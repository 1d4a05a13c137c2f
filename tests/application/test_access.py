"""Tests for the role-based access policy."""

import pytest

from ims.application.access import AccessPolicy, Capability, Role
from ims.domain.exceptions import PermissionDeniedError


class TestAccessPolicy:

    @pytest.mark.parametrize("capability", list(Capability))
    def test_admin_may_do_everything(self, capability):
        assert AccessPolicy.is_permitted(Role.ADMIN, capability)

    @pytest.mark.parametrize(
        "capability", [Capability.VIEW_CATALOG, Capability.PLACE_ORDERS, Capability.VIEW_ORDERS]
    )
    def test_seller_may_sell(self, capability):
        assert AccessPolicy.is_permitted(Role.SELLER, capability)

    @pytest.mark.parametrize("capability", [Capability.MANAGE_CATALOG, Capability.RECEIVE_STOCK])
    def test_seller_may_not_manage(self, capability):
        with pytest.raises(PermissionDeniedError, match="seller"):
            AccessPolicy.require(Role.SELLER, capability)
