"""
Cart entity and line items.

A cart is an ordered collection of line items keyed by
(product_id, color, size). Every operation returns a new Cart and
leaves the original untouched.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from ..exceptions import ValidationError
from ..value_objects.money import to_decimal

LineKey = Tuple[str, str, str]


def make_line_key(product_id, color: Optional[str] = None, size: Optional[str] = None) -> LineKey:
    return (str(product_id), color or '', size or '')


def format_line_id(key: LineKey) -> str:
    return ':'.join(key)


@dataclass(frozen=True)
class LineItem:
    """One (product, color, size, quantity) entry in a cart"""

    product_id: str
    unit_price: Decimal
    quantity: int
    available_stock: int
    discounted_price: Optional[Decimal] = None
    color: str = ''
    size: str = ''
    name: str = ''
    image: str = ''
    line_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'product_id', str(self.product_id))
        object.__setattr__(self, 'unit_price', to_decimal(self.unit_price))
        object.__setattr__(self, 'color', self.color or '')
        object.__setattr__(self, 'size', self.size or '')
        if self.discounted_price is not None:
            discounted = to_decimal(self.discounted_price)
            if discounted >= self.unit_price:
                raise ValidationError(
                    'Discounted price must be lower than the unit price',
                    details={'product_id': self.product_id},
                )
            object.__setattr__(self, 'discounted_price', discounted)
        if self.line_id is None:
            object.__setattr__(self, 'line_id', format_line_id(self.key))

    @property
    def key(self) -> LineKey:
        return make_line_key(self.product_id, self.color, self.size)

    @property
    def effective_price(self) -> Decimal:
        if self.discounted_price is not None:
            return self.discounted_price
        return self.unit_price

    @property
    def line_total(self) -> Decimal:
        return self.effective_price * self.quantity

    def with_quantity(self, quantity: int) -> 'LineItem':
        return replace(self, quantity=quantity)


def clamp_quantity(quantity: int, stock: int) -> int:
    """Clamp a quantity into [1, stock]"""
    return max(1, min(quantity, stock))


class Cart:
    """Immutable shopping cart"""

    def __init__(self, lines: Optional[Iterable[LineItem]] = None):
        self._lines: Tuple[LineItem, ...] = tuple(lines or ())

    @property
    def lines(self) -> List[LineItem]:
        return list(self._lines)

    def __iter__(self):
        return iter(self._lines)

    def __len__(self):
        return len(self._lines)

    def __eq__(self, other):
        return isinstance(other, Cart) and self._lines == other._lines

    def __repr__(self):
        return f'Cart(lines={list(self._lines)!r})'

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self._lines), Decimal('0'))

    def find(self, product_id, color: Optional[str] = None, size: Optional[str] = None) -> Optional[LineItem]:
        key = make_line_key(product_id, color, size)
        for line in self._lines:
            if line.key == key:
                return line
        return None

    def get_line(self, line_id: str) -> Optional[LineItem]:
        for line in self._lines:
            if line.line_id == str(line_id):
                return line
        return None

    def add_or_merge(self, item: LineItem) -> 'Cart':
        """
        Add `item.quantity` units of the item's identity to the cart.

        An existing line with the same (product, color, size) key has its
        quantity incremented; otherwise the item is appended. Either way the
        resulting quantity is clamped to [1, available_stock].
        """
        if item.quantity < 1:
            raise ValidationError('Quantity must be at least 1', details={'quantity': item.quantity})
        if item.available_stock < 1:
            raise ValidationError('Product is out of stock', details={'product_id': item.product_id})

        existing = self.find(item.product_id, item.color, item.size)
        if existing is None:
            added = item.with_quantity(clamp_quantity(item.quantity, item.available_stock))
            return Cart(self._lines + (added,))

        merged = replace(
            existing,
            available_stock=item.available_stock,
            quantity=clamp_quantity(existing.quantity + item.quantity, item.available_stock),
        )
        return Cart(merged if line.key == existing.key else line for line in self._lines)

    def update_quantity(self, line_id: str, new_quantity: int) -> 'Cart':
        """Set a line's quantity; quantities below 1 and unknown lines are no-ops"""
        if new_quantity < 1:
            return self
        target = self.get_line(line_id)
        if target is None:
            return self
        updated = target.with_quantity(clamp_quantity(new_quantity, target.available_stock))
        return Cart(updated if line.line_id == target.line_id else line for line in self._lines)

    def remove_line(self, line_id: str) -> 'Cart':
        return Cart(line for line in self._lines if line.line_id != str(line_id))

    def merge(self, guest: 'Cart') -> 'Cart':
        """
        Fold a guest cart into this (account) cart.

        Quantities of matching lines are summed and clamped to stock;
        guest lines that are out of stock are dropped.
        """
        merged = self
        for line in guest:
            if line.available_stock < 1 or line.quantity < 1:
                continue
            merged = merged.add_or_merge(line)
        return merged

    def stock_violations(self) -> List[LineItem]:
        """Lines asking for more units than are available"""
        return [line for line in self._lines if line.quantity > line.available_stock]
