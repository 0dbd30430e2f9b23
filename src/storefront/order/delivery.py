"""Delivery confirmation — command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class ConfirmDelivery:
    order_id = Identifier(required=True)
    user_key = Identifier()  # When given, the order must belong to this user


@storefront.command_handler(part_of=Order)
class ConfirmDeliveryHandler:
    @handle(ConfirmDelivery)
    def confirm_delivery(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id, user_key=command.user_key)
        order.confirm_delivery()
        repo.add(order)

        logger.info("Order delivered", order_id=str(order.id), remote_order_id=order.remote_order_id)
        return order.status
