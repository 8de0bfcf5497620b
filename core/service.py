from typing import Optional, Tuple
from core.domain import Campaign, Category, Coupon, Product
from core.delivery import DeliveryCostPolicy
from core.cart import Cart
from core.ftypes import Maybe
from core.lazy import iter_lines_in
from core.recursion import category_index, collect_products_recursive, flatten_categories
from core.transforms import line_total


class CatalogService:
    """Фасад над загруженным каталогом: поиск, поддеревья, новые корзины"""

    def __init__(
        self,
        categories: Tuple[Category, ...],
        products: Tuple[Product, ...],
        campaigns: Tuple[Campaign, ...] = (),
        coupons: Tuple[Coupon, ...] = (),
        delivery: Optional[DeliveryCostPolicy] = None,
    ):
        self.categories = categories
        self.products = products
        self.campaigns = campaigns
        self.coupons = coupons
        self.delivery = delivery
        self._index = category_index(categories)
        self._products = {p.title: p for p in products}

    def category_by_name(self, name: str) -> Maybe[Category]:
        return Maybe.of(self._index.get(name))

    def product_by_title(self, title: str) -> Maybe[Product]:
        return Maybe.of(self._products.get(title))

    def parent_of(self, name: str) -> Maybe[Category]:
        """Родитель категории; Nothing для корня или неизвестного имени"""
        return self.category_by_name(name).bind(lambda c: Maybe.of(c.parent))

    def products_by_category(self, name: str) -> Tuple[Product, ...]:
        """Все товары категории и её подкатегорий"""
        return collect_products_recursive(self.categories, self.products, name)

    def category_tree(self, name: str) -> Tuple[Category, ...]:
        return flatten_categories(self.categories, name)

    def campaigns_for(self, name: str) -> Tuple[Campaign, ...]:
        """Кампании, нацеленные ровно на эту категорию"""
        return tuple(filter(lambda c: c.category.name == name, self.campaigns))

    def new_cart(self) -> Cart:
        """Пустая корзина с политикой доставки из каталога"""
        return Cart(delivery=self.delivery)


class CartService:
    """Отчёты по содержимому одной корзины"""

    def __init__(self, catalog: CatalogService, cart: Cart):
        self.catalog = catalog
        self.cart = cart

    def category_spend(self, name: str) -> float:
        """Сумма по строкам из поддерева категории name"""
        names = (c.name for c in self.catalog.category_tree(name))
        return sum(map(line_total, iter_lines_in(self.cart.lines(), names)))

    def eligible_campaigns(self) -> Tuple[Campaign, ...]:
        """Кампании каталога, которые сейчас дали бы скидку"""

        def triggers(campaign: Campaign) -> bool:
            return (
                self.cart.aggregate_for(campaign.category)
                .map(lambda a: a.item_count > campaign.min_item_count)
                .get_or_else(False)
            )

        return tuple(filter(triggers, self.catalog.campaigns))
