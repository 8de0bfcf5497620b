from typing import Iterator, Iterable, Tuple
from .domain import CartLine


## ленивая группировка строк корзины по непосредственной категории
## порядок групп - порядок первого появления категории
def iter_lines_by_category(
    lines: Iterable[CartLine],
) -> Iterator[Tuple[str, Tuple[CartLine, ...]]]:
    groups = {}
    for line in lines:
        groups.setdefault(line.product.category.name, []).append(line)

    for name, group in groups.items():
        yield (name, tuple(group))


## лениво отдаёт только те строки, что попадают в заданные категории
def iter_lines_in(
    lines: Iterable[CartLine], category_names: Iterable[str]
) -> Iterator[CartLine]:
    names = set(category_names)
    for line in lines:
        if line.product.category.name in names:
            yield line
