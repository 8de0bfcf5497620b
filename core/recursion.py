from typing import Dict, Iterable, Tuple
from .domain import Category, Product

# Рекурсивный обход дерева категорий


def category_chain(category: Category) -> Tuple[Category, ...]:
    """
    Категория и все её предки, от самой категории к корню.
    Дерево обязано быть ацикличным, иначе рекурсия не закончится.

    Пример:
      Main -> Books -> Fantasy
      category_chain(Fantasy) -> (Fantasy, Books, Main)
    """
    if category.parent is None:
        return (category,)
    return (category,) + category_chain(category.parent)


def category_index(categories: Iterable[Category]) -> Dict[str, Category]:
    """Реестр категорий по имени"""
    return {c.name: c for c in categories}


def flatten_categories(
    cats: Tuple[Category, ...], root: str
) -> Tuple[Category, ...]:
    """
    Все категории поддерева root, включая сам root (обход в глубину)
    """
    root_cat = next((c for c in cats if c.name == root), None)
    if not root_cat:
        return ()

    children = tuple(
        filter(lambda c: c.parent is not None and c.parent.name == root, cats)
    )
    nested = tuple(cat for child in children for cat in flatten_categories(cats, child.name))

    return (root_cat,) + nested


def collect_products_recursive(
    cats: Tuple[Category, ...],
    prods: Tuple[Product, ...],
    root: str,
) -> Tuple[Product, ...]:
    """Товары категории root и всех её потомков"""
    names = {c.name for c in flatten_categories(cats, root)}
    return tuple(filter(lambda p: p.category.name in names, prods))
