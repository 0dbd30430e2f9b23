"""Saved shipping details, one profile per session user.

Checkout falls back to the saved address and city for any field the
``Checkout`` command leaves blank.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.events import ShippingDetailsSaved

logger = structlog.get_logger(__name__)


def shipping_errors(address, city):
    errors = {}
    if not (address or "").strip():
        errors["shipping_address"] = ["Shipping address is required"]
    if not (city or "").strip():
        errors["shipping_city"] = ["Shipping city is required"]
    return errors


@storefront.aggregate
class ShippingProfile:
    user_key = Identifier(required=True)
    shipping_address = String(max_length=255)
    shipping_city = String(max_length=100)
    updated_at = DateTime()

    @classmethod
    def create(cls, user_key):
        return cls(user_key=str(user_key))

    def save_details(self, shipping_address, shipping_city):
        errors = shipping_errors(shipping_address, shipping_city)
        if errors:
            raise ValidationError(errors)

        now = datetime.now(UTC)
        self.shipping_address = shipping_address.strip()
        self.shipping_city = shipping_city.strip()
        self.updated_at = now

        self.raise_(
            ShippingDetailsSaved(
                user_key=str(self.user_key),
                shipping_address=self.shipping_address,
                shipping_city=self.shipping_city,
                saved_at=now,
            )
        )


@storefront.command(part_of="ShippingProfile")
class SaveShippingDetails:
    user_key = Identifier(required=True)
    shipping_address = String(max_length=255)
    shipping_city = String(max_length=100)


@storefront.command_handler(part_of=ShippingProfile)
class ShippingProfileHandler:
    @handle(SaveShippingDetails)
    def save_shipping_details(self, command):
        repo = current_domain.repository_for(ShippingProfile)
        profile = repo.for_user(command.user_key)
        profile.save_details(command.shipping_address, command.shipping_city)
        repo.add(profile)

        logger.info("Shipping details saved", user_key=str(command.user_key))


def saved_shipping_details(user_key):
    """The user's saved ``(address, city)``, or ``None`` when nothing was saved."""
    profile = current_domain.repository_for(ShippingProfile).find_for_user(user_key)
    if profile is None:
        return None
    return profile.shipping_address, profile.shipping_city
