from typing import Dict, List
from core.cart import Cart
from core.lazy import iter_lines_by_category
from core.transforms import line_total

PRODUCT_ROW = "{:<25}{:<10}x{:<5}{}"
PRICE_ROW = "{:<20}{}"


def format_price(value: float) -> str:
    """Форматирует сумму в лирах"""
    return f"{value:,.2f} ₺"


# ============ Данные для отображения ============


def grouped_lines(cart: Cart) -> List[dict]:
    """
    Строки корзины, сгруппированные по непосредственной категории
    """
    return [
        {
            "category": name,
            "lines": [
                {
                    "title": line.product.title,
                    "unit_price": line.product.price,
                    "quantity": line.quantity,
                    "line_total": line_total(line),
                }
                for line in lines
            ],
        }
        for name, lines in iter_lines_by_category(cart.lines())
    ]


def cart_summary(cart: Cart) -> Dict:
    """Сводка по корзине: группы строк и все итоговые суммы"""
    return {
        "groups": grouped_lines(cart),
        "product_count": cart.product_count(),
        "delivery_count": cart.delivery_count(),
        "total_price": cart.total_price(),
        "campaign_discount": cart.campaign_discount(),
        "coupon_discount": cart.coupon_discount(),
        "total_after_discounts": cart.total_after_discounts(),
        "delivery_cost": cart.delivery_cost(),
        "final_price": cart.final_price(),
    }


# ============ Текстовый чек ============


def format_receipt(cart: Cart) -> str:
    """
    Текстовый чек: товары по категориям, итог, скидки (только ненулевые),
    доставка и финальная цена
    """
    if cart.is_empty():
        return "Your cart is empty."

    summary = cart_summary(cart)
    rows = []

    for group in summary["groups"]:
        rows.append(f"{group['category']}:")
        rows.append("-" * 30)
        for line in group["lines"]:
            rows.append(
                PRODUCT_ROW.format(
                    line["title"],
                    format_price(line["unit_price"]),
                    line["quantity"],
                    format_price(line["line_total"]),
                )
            )
        rows.append("")

    rows.append(PRICE_ROW.format("Total Price:", format_price(summary["total_price"])))
    if summary["campaign_discount"] > 0:
        rows.append(
            PRICE_ROW.format(
                "Campaign Discount:", format_price(summary["campaign_discount"])
            )
        )
    if summary["coupon_discount"] > 0:
        rows.append(
            PRICE_ROW.format("Coupon Discount:", format_price(summary["coupon_discount"]))
        )
    rows.append("")

    rows.append(PRICE_ROW.format("Shipping Price:", format_price(summary["delivery_cost"])))
    rows.append(PRICE_ROW.format("Final Price:", format_price(summary["final_price"])))
    return "\n".join(rows)
