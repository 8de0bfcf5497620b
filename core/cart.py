from typing import Dict, List, Optional, Tuple
from .domain import Campaign, CartLine, Category, CategoryAggregate, Coupon, Product
from .delivery import DeliveryMethod
from .discounts import campaign_discount, coupon_discount
from .ftypes import Maybe
from .transforms import category_aggregates
from .logger import get_logger

log = get_logger("cart")


class Cart:
    """
    Корзина одной сессии оформления заказа.

    Меняется только через add_item, apply_campaigns и apply_coupon.
    Все скидки пересчитываются при каждом запросе, ничего не кэшируется.
    Не потокобезопасна: одна корзина на одну сессию.
    """

    def __init__(self, delivery: Optional[DeliveryMethod] = None):
        self.delivery = delivery
        # строки корзины по title
        self._lines: Dict[str, CartLine] = {}
        self._campaigns: List[Campaign] = []
        self._coupon: Optional[Coupon] = None
        self._total_price = 0.0

    # ============ Изменение корзины ============

    def add_item(self, product: Optional[Product], count: int) -> None:
        """Добавляет count штук товара; None или count <= 0 игнорируются"""
        if product is None or count <= 0:
            log.debug("Ignoring add_item(%r, %s)", product, count)
            return

        line = self._lines.get(product.title, CartLine(product, 0, 0.0))
        self._lines[product.title] = line.add(product, count)

        self._total_price += product.price * count
        log.debug("Added %s x%d, total %.2f", product.title, count, self._total_price)

    def apply_campaigns(self, *campaigns: Optional[Campaign]) -> None:
        """Добавляет кампании в конец списка, пропуская None"""
        self._campaigns.extend(c for c in campaigns if c is not None)

    def apply_coupon(self, coupon: Optional[Coupon]) -> None:
        """Заменяет текущий купон; None игнорируется"""
        if coupon is None:
            return
        self._coupon = coupon

    # ============ Состояние ============

    @property
    def campaigns(self) -> Tuple[Campaign, ...]:
        return tuple(self._campaigns)

    @property
    def coupon(self) -> Maybe[Coupon]:
        return Maybe.of(self._coupon)

    def lines(self) -> Tuple[CartLine, ...]:
        """Строки в порядке добавления"""
        return tuple(self._lines.values())

    def quantity_of(self, product: Product) -> int:
        line = self._lines.get(product.title)
        return line.quantity if line is not None else 0

    def aggregates(self) -> Dict[str, CategoryAggregate]:
        return category_aggregates(self.lines())

    def aggregate_for(self, category: Category) -> Maybe[CategoryAggregate]:
        return Maybe.of(self.aggregates().get(category.name))

    def product_count(self) -> int:
        return len(self._lines)

    def delivery_count(self) -> int:
        """Число различных непосредственных категорий (предки не считаются)"""
        return len({line.product.category.name for line in self._lines.values()})

    def is_empty(self) -> bool:
        return not self._lines

    # ============ Итоги ============

    def total_price(self) -> float:
        return self._total_price

    def campaign_discount(self) -> float:
        return campaign_discount(self._campaigns, self.aggregates())

    def coupon_discount(self) -> float:
        return coupon_discount(self._coupon, self._total_price, self.campaign_discount())

    def total_after_discounts(self) -> float:
        return self._total_price - self.campaign_discount() - self.coupon_discount()

    def delivery_cost(self) -> float:
        if self.delivery is None:
            return 0.0
        return self.delivery.calculate_for(self)

    def final_price(self) -> float:
        return self.total_after_discounts() + self.delivery_cost()
