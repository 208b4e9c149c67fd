"""
Menu Reference Data

The fixed list of dishes served at the counter. Items are frozen
pydantic models; carts copy them into CartItem lines.
"""

from typing import Optional

from canteen.schemas import MenuCategory, MenuItem


MENU: tuple[MenuItem, ...] = (
    # Starters
    MenuItem(
        id="veg-spring-rolls",
        name="Veg Spring Rolls",
        description="Crispy rolls stuffed with cabbage, carrot and glass noodles.",
        price=4.5,
        image="/images/veg-spring-rolls.jpg",
        category=MenuCategory.STARTERS,
    ),
    MenuItem(
        id="chilli-paneer",
        name="Chilli Paneer",
        description="Cottage cheese cubes tossed with peppers in a spicy glaze.",
        price=6.0,
        image="/images/chilli-paneer.jpg",
        category=MenuCategory.STARTERS,
    ),
    MenuItem(
        id="chicken-lollipop",
        name="Chicken Lollipop",
        description="Frenched wings fried golden and served with schezwan dip.",
        price=7.25,
        image="/images/chicken-lollipop.jpg",
        category=MenuCategory.STARTERS,
    ),
    # Heavy Snacks
    MenuItem(
        id="pav-bhaji",
        name="Pav Bhaji",
        description="Buttery mashed vegetable curry with two toasted buns.",
        price=5.5,
        image="/images/pav-bhaji.jpg",
        category=MenuCategory.HEAVY_SNACKS,
    ),
    MenuItem(
        id="chole-bhature",
        name="Chole Bhature",
        description="Spiced chickpeas with two fluffy fried breads.",
        price=6.5,
        image="/images/chole-bhature.jpg",
        category=MenuCategory.HEAVY_SNACKS,
    ),
    # Rice & Noodles
    MenuItem(
        id="veg-fried-rice",
        name="Veg Fried Rice",
        description="Wok-tossed rice with spring onion, beans and soy.",
        price=6.0,
        image="/images/veg-fried-rice.jpg",
        category=MenuCategory.RICE_AND_NOODLES,
    ),
    MenuItem(
        id="hakka-noodles",
        name="Hakka Noodles",
        description="Thin noodles stir-fried with cabbage and peppers.",
        price=6.0,
        image="/images/hakka-noodles.jpg",
        category=MenuCategory.RICE_AND_NOODLES,
    ),
    MenuItem(
        id="chicken-biryani",
        name="Chicken Biryani",
        description="Layered basmati rice and chicken, slow cooked with whole spices.",
        price=9.5,
        image="/images/chicken-biryani.jpg",
        category=MenuCategory.RICE_AND_NOODLES,
    ),
    # Sides
    MenuItem(
        id="masala-fries",
        name="Masala Fries",
        description="Fries dusted with chaat masala.",
        price=3.0,
        image="/images/masala-fries.jpg",
        category=MenuCategory.SIDES,
    ),
    MenuItem(
        id="raita",
        name="Cucumber Raita",
        description="Chilled yoghurt with cucumber and roasted cumin.",
        price=2.0,
        image="/images/raita.jpg",
        category=MenuCategory.SIDES,
    ),
)


def get_menu(category: Optional[MenuCategory] = None) -> list[MenuItem]:
    """Return the menu in display order, optionally limited to one category."""
    if category is None:
        return list(MENU)
    return [item for item in MENU if item.category == category]


def get_menu_item(item_id: str) -> Optional[MenuItem]:
    """Look up a menu item by id."""
    for item in MENU:
        if item.id == item_id:
            return item
    return None
