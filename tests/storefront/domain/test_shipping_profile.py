import pytest
from protean.exceptions import ValidationError

from storefront.order.events import ShippingDetailsSaved
from storefront.order.shipping import ShippingProfile, shipping_errors


class TestSaveDetails:
    def test_stores_trimmed_details(self):
        profile = ShippingProfile.create("user-001")
        profile.save_details("  1 Main St ", "Springfield ")

        assert profile.shipping_address == "1 Main St"
        assert profile.shipping_city == "Springfield"
        assert profile.updated_at is not None

    def test_raises_saved_event(self):
        profile = ShippingProfile.create("user-001")
        profile.save_details("1 Main St", "Springfield")

        event = next(e for e in profile._events if isinstance(e, ShippingDetailsSaved))
        assert event.user_key == "user-001"
        assert event.shipping_city == "Springfield"

    def test_blank_fields_are_rejected(self):
        profile = ShippingProfile.create("user-001")
        with pytest.raises(ValidationError) as exc:
            profile.save_details(" ", "")

        assert set(exc.value.messages) == {"shipping_address", "shipping_city"}
        assert profile.shipping_address is None


class TestShippingErrors:
    def test_complete_details_have_no_errors(self):
        assert shipping_errors("1 Main St", "Springfield") == {}

    def test_missing_city(self):
        assert shipping_errors("1 Main St", None) == {"shipping_city": ["Shipping city is required"]}
