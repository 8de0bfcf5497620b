import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
import pytest
from core.cart import Cart
from core.delivery import DeliveryCostPolicy
from core.domain import Campaign, Category, Coupon, DiscountType, Product
from core.lazy import iter_lines_by_category, iter_lines_in
from Receipt_Service.receipt import cart_summary, format_price, format_receipt, grouped_lines

main = Category("Main")
books = Category("Books", main)
movies = Category("Movies", main)


@pytest.fixture
def cart():
    c = Cart(DeliveryCostPolicy(2.0, 0.5, 2.99))
    c.add_item(Product("Book A", 20.0, books), 3)
    c.add_item(Product("Fight Club", 7.99, movies), 1)
    c.add_item(Product("Book B", 15.0, books), 2)
    return c


def test_format_price():
    assert format_price(7.99) == "7.99 ₺"
    assert format_price(1234.5) == "1,234.50 ₺"


def test_iter_lines_by_category_is_lazy_and_ordered(cart):
    gen = iter_lines_by_category(cart.lines())
    assert hasattr(gen, "__next__")
    groups = list(gen)
    assert [name for name, _ in groups] == ["Books", "Movies"]
    assert [line.product.title for line in groups[0][1]] == ["Book A", "Book B"]


def test_iter_lines_in(cart):
    assert [line.product.title for line in iter_lines_in(cart.lines(), ["Movies"])] == ["Fight Club"]
    assert list(iter_lines_in(cart.lines(), [])) == []


def test_grouped_lines(cart):
    groups = grouped_lines(cart)
    assert groups[0]["category"] == "Books"
    first = groups[0]["lines"][0]
    assert first == {
        "title": "Book A",
        "unit_price": 20.0,
        "quantity": 3,
        "line_total": 60.0,
    }
    assert groups[1]["lines"][0]["line_total"] == pytest.approx(7.99)


def test_cart_summary_totals(cart):
    cart.apply_campaigns(Campaign(books, 20.0, 4, DiscountType.RATE))
    cart.apply_coupon(Coupon(50.0, 10.0, DiscountType.AMOUNT))
    summary = cart_summary(cart)

    assert summary["total_price"] == pytest.approx(97.99)
    assert summary["campaign_discount"] == pytest.approx(18.0)
    assert summary["coupon_discount"] == pytest.approx(10.0)
    assert summary["delivery_cost"] == pytest.approx(2.0 * 2 + 0.5 * 3 + 2.99)
    assert summary["final_price"] == pytest.approx(97.99 - 18.0 - 10.0 + 8.49)


def test_format_receipt_empty():
    assert format_receipt(Cart()) == "Your cart is empty."


def test_format_receipt_lines(cart):
    text = format_receipt(cart)
    assert text.startswith("Books:")
    assert "Movies:" in text
    assert "Total Price:" in text
    assert "Final Price:" in text
    # нулевые скидки не печатаются
    assert "Campaign Discount:" not in text
    assert "Coupon Discount:" not in text


def test_format_receipt_shows_discounts(cart):
    cart.apply_campaigns(Campaign(main, 10.0, 1, DiscountType.RATE))
    text = format_receipt(cart)
    assert "Campaign Discount:" in text
    assert format_price(cart.campaign_discount()) in text
