from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from .cart import Cart


class DeliveryMethod(Protocol):
    """Любой способ расчёта доставки, который можно привязать к корзине"""

    def calculate_for(self, cart: Optional[Cart]) -> float: ...


@dataclass(frozen=True)
class DeliveryCostPolicy:
    """
    cost = cost_per_delivery * число_категорий
         + cost_per_product * число_товаров
         + fixed_cost

    Категории считаются только непосредственные (без предков).
    """

    cost_per_delivery: float
    cost_per_product: float
    fixed_cost: float

    def calculate_for(self, cart: Optional[Cart]) -> float:
        # корзины нет; пустая корзина платит только fixed_cost
        if cart is None:
            return 0.0

        return (
            self.cost_per_delivery * cart.delivery_count()
            + self.cost_per_product * cart.product_count()
            + self.fixed_cost
        )
