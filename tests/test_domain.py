import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
import pytest
from core.domain import CartLine, Category, CategoryAggregate, Product
from core.ftypes import Maybe, Either
from core.recursion import (
    category_chain,
    category_index,
    collect_products_recursive,
    flatten_categories,
)

main = Category("Movies, Books and Games")
books = Category("Books", main)
fantasy = Category("Fantasy", books)
movies = Category("Movies", main)
other = Category("Electronics")


# Идентичность по имени / названию


def test_category_equality_by_name_only():
    assert Category("Books") == books
    assert hash(Category("Books")) == hash(books)
    assert Category("Books", other) == books


def test_product_identity_by_title_only():
    p1 = Product("Da Vinci Code", 15.0, books)
    p2 = Product("Da Vinci Code", 99.0, movies)
    assert p1 == p2
    assert len({p1, p2}) == 1
    assert p1 != Product("War And Peace", 15.0, books)


def test_category_aggregate_add_is_additive():
    agg = CategoryAggregate().add(3, 60.0).add(2, 30.0)
    assert agg.item_count == 5
    assert agg.total_price == pytest.approx(90.0)


def test_cart_line_add_keeps_first_product_and_sums_amount():
    line = CartLine(Product("Dune", 10.0, books), 0, 0.0)
    line = line.add(Product("Dune", 10.0, books), 1).add(Product("Dune", 30.0, fantasy), 1)
    assert line.product.price == 10.0
    assert line.quantity == 2
    assert line.amount == pytest.approx(40.0)


# Дерево категорий


def test_category_chain_goes_to_root():
    assert category_chain(fantasy) == (fantasy, books, main)
    assert category_chain(other) == (other,)


def test_category_index_by_name():
    index = category_index((main, books, movies))
    assert index["Books"] is books
    assert "Fantasy" not in index


def test_flatten_categories_subtree():
    cats = (main, books, fantasy, movies, other)
    names = {c.name for c in flatten_categories(cats, "Books")}
    assert names == {"Books", "Fantasy"}
    assert flatten_categories(cats, "Missing") == ()


def test_collect_products_recursive():
    cats = (main, books, fantasy, movies, other)
    prods = (
        Product("Dune", 30.0, fantasy),
        Product("Fight Club", 7.99, movies),
        Product("Headphones", 100.0, other),
    )
    titles = {p.title for p in collect_products_recursive(cats, prods, "Movies, Books and Games")}
    assert titles == {"Dune", "Fight Club"}


# Maybe / Either


def test_maybe_of_and_map():
    assert Maybe.of(None).is_none()
    assert Maybe.of(0).is_some()
    assert Maybe.some(10).map(lambda x: x * 2).get_or_else(0) == 20
    assert Maybe.nothing().map(lambda x: x * 2).get_or_else(-1) == -1
    assert Maybe.some(3).bind(lambda x: Maybe.of(None)).is_none()
    assert Maybe.some(3).bind(lambda x: Maybe.some(x + 1)).get_or_else(0) == 4


def test_either_map_and_bind():
    ok = Either.right(5)
    err = Either.left({"error": "bad"})
    assert ok.map(lambda x: x + 1).get_or_else(0) == 6
    assert ok.bind(lambda x: Either.left({"error": str(x)})).is_left
    assert err.map(lambda x: x + 1).is_left
    assert err.get_or_else(0) == 0
