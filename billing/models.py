import json
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List


@dataclass
class NewBill:
    """Bill data as submitted by the counter, before the store assigns an id."""
    bill_number: str
    customer_name: str
    customer_phone: str
    snacks_total: float = 0
    grocery_total: float = 0
    hygiene_total: float = 0
    snacks_tax: float = 0
    grocery_tax: float = 0
    hygiene_tax: float = 0
    grand_total: float = 0
    items: str = "[]"  # JSON text of the bill items


@dataclass(frozen=True)
class Bill:
    id: int
    bill_number: str
    customer_name: str
    customer_phone: str
    snacks_total: float
    grocery_total: float
    hygiene_total: float
    snacks_tax: float
    grocery_tax: float
    hygiene_tax: float
    grand_total: float
    items: str
    created_at: datetime

    @classmethod
    def from_new(cls, new_bill: NewBill, bill_id: int, created_at: datetime) -> "Bill":
        return cls(
            id=bill_id,
            bill_number=new_bill.bill_number,
            customer_name=new_bill.customer_name,
            customer_phone=new_bill.customer_phone,
            snacks_total=new_bill.snacks_total,
            grocery_total=new_bill.grocery_total,
            hygiene_total=new_bill.hygiene_total,
            snacks_tax=new_bill.snacks_tax,
            grocery_tax=new_bill.grocery_tax,
            hygiene_tax=new_bill.hygiene_tax,
            grand_total=new_bill.grand_total,
            items=new_bill.items,
            created_at=created_at,
        )

    @property
    def item_list(self) -> List[Dict]:
        return json.loads(self.items or "[]")

    def category_totals(self) -> Dict[str, float]:
        return {
            "snacks": self.snacks_total,
            "grocery": self.grocery_total,
            "hygiene": self.hygiene_total,
        }

    def category_taxes(self) -> Dict[str, float]:
        return {
            "snacks": self.snacks_tax,
            "grocery": self.grocery_tax,
            "hygiene": self.hygiene_tax,
        }

    def __str__(self):
        return f"Bill {self.bill_number} - {self.customer_name}"


def new_bill_from_calculation(bill_number: str, customer_name: str, customer_phone: str,
                              calculation) -> NewBill:
    """Build a NewBill from a BillCalculation."""
    data = calculation.to_dict()
    return NewBill(
        bill_number=bill_number,
        customer_name=customer_name,
        customer_phone=customer_phone,
        snacks_total=data["snacksTotal"],
        grocery_total=data["groceryTotal"],
        hygiene_total=data["hygieneTotal"],
        snacks_tax=data["snacksTax"],
        grocery_tax=data["groceryTax"],
        hygiene_tax=data["hygieneTax"],
        grand_total=data["grandTotal"],
        items=json.dumps(data["items"]),
    )
