import json
from functools import reduce
from typing import Callable, Dict, Optional, Tuple
from .ftypes import Either
from .domain import Campaign, CartLine, Category, CategoryAggregate, Coupon, DiscountType, Product
from .delivery import DeliveryCostPolicy
from .recursion import category_chain
from .logger import get_logger

log = get_logger("transforms")


# ============ Агрегаты по категориям ============


def line_total(line: CartLine) -> float:
    return line.amount


def category_aggregates(lines: Tuple[CartLine, ...]) -> Dict[str, CategoryAggregate]:
    """
    Пересчитывает агрегаты по строкам корзины.
    Каждая строка попадает в свою категорию и во всех её предков,
    поэтому кампания на родителя видит покупки всех потомков.
    Сумма берётся из line.amount, то есть по всем добавлениям.
    """

    def add_line(acc: dict, line: CartLine) -> dict:
        def add_to_category(inner: dict, category: Category) -> dict:
            current = inner.get(category.name, CategoryAggregate())
            return {**inner, category.name: current.add(line.quantity, line.amount)}

        return reduce(add_to_category, category_chain(line.product.category), acc)

    return reduce(add_line, lines, {})


# ============ Разбор seed-данных (Either) ============


def parse_number(
    raw: dict, key: str, default=0, convert: Callable = float
) -> Either[dict, float]:
    """Число из raw[key]; null, строка не-число и т.п. -> Left"""
    value = raw.get(key, default)
    try:
        return Either.right(convert(value))
    except (TypeError, ValueError):
        return Either.left({"error": f"Invalid number for '{key}': {value!r}"})


def parse_discount_type(raw: str) -> Either[dict, DiscountType]:
    try:
        return Either.right(DiscountType(str(raw).upper()))
    except ValueError:
        return Either.left({"error": f"Unknown discount type '{raw}'"})


def parse_category(raw: dict, index: Dict[str, Category]) -> Either[dict, Category]:
    """Родитель должен быть объявлен раньше потомка"""
    name = raw.get("name")
    if not name:
        return Either.left({"error": "Category without name"})

    parent_name = raw.get("parent")
    if parent_name is None:
        return Either.right(Category(name=name))
    if parent_name not in index:
        return Either.left(
            {"error": f"Parent '{parent_name}' of category '{name}' is not defined"}
        )
    return Either.right(Category(name=name, parent=index[parent_name]))


def parse_product(raw: dict, index: Dict[str, Category]) -> Either[dict, Product]:
    title = raw.get("title")
    category_name = raw.get("category")

    if not title:
        return Either.left({"error": "Product without title"})
    if category_name not in index:
        return Either.left(
            {"error": f"Unknown category '{category_name}' for product '{title}'"}
        )

    def build(price: float) -> Either[dict, Product]:
        if price < 0:
            return Either.left({"error": f"Negative price for product '{title}'"})
        return Either.right(Product(title=title, price=price, category=index[category_name]))

    return parse_number(raw, "price").bind(build)


def parse_campaign(raw: dict, index: Dict[str, Category]) -> Either[dict, Campaign]:
    category_name = raw.get("category")
    if category_name not in index:
        return Either.left({"error": f"Unknown campaign category '{category_name}'"})

    return parse_discount_type(raw.get("discount_type", "RATE")).bind(
        lambda dt: parse_number(raw, "discount").bind(
            lambda discount: parse_number(raw, "min_item_count", convert=int).map(
                lambda min_count: Campaign(
                    category=index[category_name],
                    discount=discount,
                    min_item_count=min_count,
                    discount_type=dt,
                )
            )
        )
    )


def parse_coupon(raw: dict) -> Either[dict, Coupon]:
    return parse_discount_type(raw.get("discount_type", "AMOUNT")).bind(
        lambda dt: parse_number(raw, "min_price_total").bind(
            lambda min_total: parse_number(raw, "discount").map(
                lambda discount: Coupon(
                    min_price_total=min_total,
                    discount=discount,
                    discount_type=dt,
                )
            )
        )
    )


def parse_delivery(raw: dict) -> Either[dict, DeliveryCostPolicy]:
    keys = ("cost_per_delivery", "cost_per_product", "fixed_cost")
    parsed = {key: parse_number(raw, key) for key in keys}

    invalid = [r for r in parsed.values() if r.is_left]
    if invalid:
        return invalid[0]

    costs = {key: r.value for key, r in parsed.items()}
    negative = [key for key, value in costs.items() if value < 0]
    if negative:
        return Either.left({"error": f"Negative delivery cost: {', '.join(negative)}"})
    return Either.right(DeliveryCostPolicy(**costs))


def _keep_valid(results, kind: str) -> tuple:
    """Отбрасывает Left-результаты, сообщая о каждом в лог"""
    for r in results:
        if r.is_left:
            log.warning("Skipping %s: %s", kind, r.value["error"])
    return tuple(r.value for r in results if r.is_right)


def parse_seed(
    data: dict,
) -> Tuple[
    Tuple[Category, ...],
    Tuple[Product, ...],
    Tuple[Campaign, ...],
    Tuple[Coupon, ...],
    Optional[DeliveryCostPolicy],
]:
    """Строит иммутабельные объекты из словаря seed; некорректные записи пропускаются"""

    def add_category(acc: Tuple[Dict[str, Category], tuple], raw: dict):
        index, results = acc
        result = parse_category(raw, index)
        if result.is_right:
            index = {**index, result.value.name: result.value}
        return index, results + (result,)

    index, category_results = reduce(
        add_category, data.get("categories", []), ({}, ())
    )
    categories = _keep_valid(category_results, "category")

    products = _keep_valid(
        [parse_product(p, index) for p in data.get("products", [])], "product"
    )
    campaigns = _keep_valid(
        [parse_campaign(c, index) for c in data.get("campaigns", [])], "campaign"
    )
    coupons = _keep_valid(
        [parse_coupon(c) for c in data.get("coupons", [])], "coupon"
    )

    delivery = None
    if "delivery" in data:
        valid = _keep_valid((parse_delivery(data["delivery"]),), "delivery policy")
        delivery = valid[0] if valid else None

    return categories, products, campaigns, coupons, delivery


def load_seed(path: str):
    """Загружает seed.json и возвращает кортежи иммутабельных данных"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return parse_seed(data)
