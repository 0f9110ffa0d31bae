"""Bill calculation over the product catalog."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from . import catalog as product_catalog


@dataclass
class BillItem:
    category: str
    product_key: str
    name: str
    price: float
    quantity: int
    total: float

    def to_dict(self) -> Dict:
        return {
            "category": self.category,
            "productKey": self.product_key,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "total": self.total,
        }


@dataclass
class BillCalculation:
    items: List[BillItem] = field(default_factory=list)
    snacks_total: float = 0
    grocery_total: float = 0
    hygiene_total: float = 0
    snacks_tax: float = 0
    grocery_tax: float = 0
    hygiene_tax: float = 0
    grand_total: float = 0

    @property
    def subtotal(self) -> float:
        return self.snacks_total + self.grocery_total + self.hygiene_total

    @property
    def total_tax(self) -> float:
        return self.snacks_tax + self.grocery_tax + self.hygiene_tax

    def category_total(self, category: str) -> float:
        return getattr(self, f"{category}_total")

    def category_tax(self, category: str) -> float:
        return getattr(self, f"{category}_tax")

    def to_dict(self) -> Dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "snacksTotal": self.snacks_total,
            "groceryTotal": self.grocery_total,
            "hygieneTotal": self.hygiene_total,
            "snacksTax": self.snacks_tax,
            "groceryTax": self.grocery_tax,
            "hygieneTax": self.hygiene_tax,
            "grandTotal": self.grand_total,
        }


def calculate_bill(quantities: Dict, catalog: Optional[Dict] = None,
                   tax_rate: Optional[float] = None) -> BillCalculation:
    """
    Build a full bill from a quantity selection.

    Missing, None, zero, negative or non-numeric quantities contribute
    nothing, and keys that are not in the catalog are ignored, so this
    never raises. Amounts are left unrounded.
    """
    if catalog is None:
        catalog = product_catalog.get_catalog()
    if tax_rate is None:
        tax_rate = product_catalog.get_tax_rate()
    if not isinstance(quantities, dict):
        quantities = {}

    items: List[BillItem] = []
    totals = {category: 0 for category in product_catalog.CATEGORIES}

    for category, key, product in product_catalog.iter_products(catalog):
        quantity = quantities.get(key)
        # anything that is not a plain number counts as zero
        if not isinstance(quantity, (int, float)) or isinstance(quantity, bool):
            continue
        if quantity > 0:
            line_total = product["price"] * quantity
            items.append(BillItem(
                category=category,
                product_key=key,
                name=product["name"],
                price=product["price"],
                quantity=quantity,
                total=line_total,
            ))
            totals[category] += line_total

    taxes = {category: totals[category] * tax_rate for category in totals}
    grand_total = sum(totals.values()) + sum(taxes.values())

    return BillCalculation(
        items=items,
        snacks_total=totals["snacks"],
        grocery_total=totals["grocery"],
        hygiene_total=totals["hygiene"],
        snacks_tax=taxes["snacks"],
        grocery_tax=taxes["grocery"],
        hygiene_tax=taxes["hygiene"],
        grand_total=grand_total,
    )


def format_currency(amount: float, symbol: str = "₹") -> str:
    """Return amount formatted to two decimals with the currency symbol."""
    return f"{symbol}{amount:.2f}"
