from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Category:
    """
    Узел дерева категорий. Сравнение и хэш только по name.
    Родитель создаётся раньше потомка, поэтому цикл собрать нельзя.
    """

    name: str
    parent: Optional["Category"] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Product:
    """Товар; два товара с одинаковым title считаются одним товаром"""

    title: str
    price: float = field(compare=False)
    category: Category = field(compare=False)


@dataclass(frozen=True)
class CartLine:
    """
    Строка корзины. amount - сумма price * count по всем добавлениям,
    даже если товар с тем же title пришёл с другой ценой.
    """

    product: Product
    quantity: int
    amount: float

    def add(self, product: Product, count: int) -> "CartLine":
        return CartLine(
            product=self.product,
            quantity=self.quantity + count,
            amount=self.amount + product.price * count,
        )


@dataclass(frozen=True)
class CategoryAggregate:
    item_count: int = 0
    total_price: float = 0.0

    def add(self, count: int, amount: float) -> "CategoryAggregate":
        """Новый агрегат с добавленными count товарами на сумму amount"""
        return CategoryAggregate(
            item_count=self.item_count + count,
            total_price=self.total_price + amount,
        )


class DiscountType(str, Enum):
    RATE = "RATE"  # процент, 0..100
    AMOUNT = "AMOUNT"  # фиксированная сумма


@dataclass(frozen=True)
class Campaign:
    """Скидка на категорию при item_count > min_item_count"""

    category: Category
    discount: float
    min_item_count: int
    discount_type: DiscountType


@dataclass(frozen=True)
class Coupon:
    """Скидка на всю корзину при сумме после кампаний >= min_price_total"""

    min_price_total: float
    discount: float
    discount_type: DiscountType
