from functools import reduce
from typing import Dict, Iterable, Optional
from .domain import Campaign, CategoryAggregate, Coupon, DiscountType

# Допуск для сравнения сумм с порогом купона
EPSILON = 0.001


def discount_amount(discount_type: DiscountType, magnitude: float, base: float) -> float:
    """
    Размер скидки для обоих типов правил:
    RATE   -> base * magnitude / 100
    AMOUNT -> magnitude (не зависит от base)
    """
    if discount_type == DiscountType.RATE:
        return base * magnitude / 100
    return magnitude


# ============ Кампании ============


def campaign_contribution(
    campaign: Campaign, aggregates: Dict[str, CategoryAggregate]
) -> float:
    """
    Вклад одной кампании. Агрегат ищется точно по имени категории кампании;
    нет агрегата или item_count <= min_item_count -> 0.
    """
    aggregate = aggregates.get(campaign.category.name)
    if aggregate is None or aggregate.item_count <= campaign.min_item_count:
        return 0.0
    return discount_amount(
        campaign.discount_type, campaign.discount, aggregate.total_price
    )


def campaign_discount(
    campaigns: Iterable[Campaign], aggregates: Dict[str, CategoryAggregate]
) -> float:
    """Сумма вкладов всех кампаний в порядке применения (пересечения не гасятся)"""
    return reduce(
        lambda acc, c: acc + campaign_contribution(c, aggregates), campaigns, 0.0
    )


# ============ Купон ============


def is_coupon_eligible(coupon: Coupon, price_after_campaigns: float) -> bool:
    """Порог включительный, с допуском EPSILON на ошибки округления"""
    return (
        price_after_campaigns >= coupon.min_price_total
        or abs(price_after_campaigns - coupon.min_price_total) < EPSILON
    )


def coupon_discount(
    coupon: Optional[Coupon], total_price: float, campaigns_off: float
) -> float:
    """
    Скидка купона считается от цены ПОСЛЕ кампаний:
    и порог, и база для RATE.
    """
    if coupon is None:
        return 0.0

    price_after_campaigns = total_price - campaigns_off
    if not is_coupon_eligible(coupon, price_after_campaigns):
        return 0.0

    return discount_amount(coupon.discount_type, coupon.discount, price_after_campaigns)
