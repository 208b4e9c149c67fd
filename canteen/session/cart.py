"""
Shopping Cart

Lines are kept in the order they were first added. Adding an item that
is already in the cart bumps its quantity instead of adding a line, so
there is at most one line per menu item id.
"""

from typing import Iterator

from canteen.schemas import CartItem, MenuItem


class Cart:
    """Client-side cart of menu items and quantities."""

    def __init__(self):
        self._items: list[CartItem] = []

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def total(self) -> float:
        return sum((line.line_total for line in self._items), 0.0)

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self._items)

    def add(self, item: MenuItem) -> None:
        for index, line in enumerate(self._items):
            if line.id == item.id:
                self._items[index] = line.model_copy(update={"quantity": line.quantity + 1})
                return
        fields = item.model_dump(exclude={"quantity"})
        self._items.append(CartItem(**fields, quantity=1))

    def remove(self, item_id: str) -> None:
        self._items = [line for line in self._items if line.id != item_id]

    def update_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove(item_id)
            return
        self._items = [
            line.model_copy(update={"quantity": quantity}) if line.id == item_id else line
            for line in self._items
        ]

    def clear(self) -> None:
        self._items = []

    def snapshot(self) -> list[CartItem]:
        """Independent copy of the lines, for submitting with an order."""
        return [line.model_copy(deep=True) for line in self._items]
