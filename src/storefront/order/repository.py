"""Order lookups for customers, checkout and the back-office."""

from datetime import date, datetime

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus


def _newest_first(orders):
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


@storefront.repository(part_of=Order)
class OrderRepository:
    def list_all(self) -> list[Order]:
        return _newest_first(self._dao.query.all().items)

    def for_customer(self, customer_id) -> list[Order]:
        return _newest_first(self._dao.query.filter(customer_id=str(customer_id)).all().items)

    def find_by_idempotency_key(self, customer_id, idempotency_key) -> Order | None:
        if not idempotency_key:
            return None
        orders = self._dao.query.filter(customer_id=str(customer_id), idempotency_key=idempotency_key).all().items
        return orders[0] if orders else None

    def count_with_status(self, status: OrderStatus) -> int:
        return self._dao.query.filter(status=status.value).all().total

    def created_between(self, start: date, end: date) -> list[Order]:
        """Orders created on any day from ``start`` to ``end`` inclusive, newest first."""
        return [o for o in self.list_all() if start <= _day_of(o.created_at) <= end]


def _day_of(moment: datetime) -> date:
    return moment.date()
