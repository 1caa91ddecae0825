"""Paying for an order through the gateway: binding a gateway order, recording the payment."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class AttachGatewayOrder:
    order_id = Identifier(required=True)
    gateway_order_id = String(required=True, max_length=255)
    amount = Integer(required=True)  # paise


@storefront.command(part_of="Order")
class RecordPayment:
    order_id = Identifier(required=True)
    payment_reference = String(required=True, max_length=255)
    gateway_order_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=Order)
class OrderPaymentHandler:
    @handle(AttachGatewayOrder)
    def attach_gateway_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.attach_gateway_order(command.gateway_order_id, command.amount)
        repo.add(order)
        return order.gateway_order_id

    @handle(RecordPayment)
    def record_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.record_payment(command.payment_reference, command.gateway_order_id)
        repo.add(order)
        return order.payment_status
