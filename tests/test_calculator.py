import pytest

from billing.calculator import calculate_bill, format_currency
from billing.catalog import CATEGORIES, PRODUCTS


def test_reference_selection():
    """
    Two Nutella and one Atta: 240 snacks, 42 grocery, 5% tax on each.
    """
    calc = calculate_bill({"nutella": 2, "atta": 1})

    assert [(i.product_key, i.price, i.quantity, i.total) for i in calc.items] == [
        ("nutella", 120, 2, 240),
        ("atta", 42, 1, 42),
    ]
    assert calc.items[0].name == "Nutella Choco Spread"
    assert calc.items[0].category == "snacks"
    assert calc.items[1].category == "grocery"
    assert calc.snacks_total == 240
    assert calc.grocery_total == 42
    assert calc.hygiene_total == 0
    assert calc.snacks_tax == pytest.approx(12)
    assert calc.grocery_tax == pytest.approx(2.1)
    assert calc.hygiene_tax == 0
    assert calc.grand_total == pytest.approx(296.1)


def test_empty_selection_gives_empty_bill():
    for selection in ({}, None, {"nutella": 0, "soap": None}):
        calc = calculate_bill(selection)
        assert calc.items == []
        assert calc.grand_total == 0
        assert calc.subtotal == 0
        assert calc.total_tax == 0


def test_items_follow_catalog_order_not_selection_order():
    calc = calculate_bill({"sanitizer": 1, "tea": 1, "lays": 3})
    assert [i.product_key for i in calc.items] == ["lays", "tea", "sanitizer"]


@pytest.mark.parametrize("selection", [
    {"nutella": 1},
    {"oreo": 7, "rice": 3, "shampoo": 2},
    {key: 1 for category in CATEGORIES for key in PRODUCTS[category]},
    {"lays": 13, "sugar": 9, "mask": 11, "foam": 4},
])
def test_totals_add_up(selection):
    calc = calculate_bill(selection)
    for category in CATEGORIES:
        assert calc.category_tax(category) == pytest.approx(calc.category_total(category) * 0.05)
    assert calc.grand_total == pytest.approx(
        calc.snacks_total + calc.grocery_total + calc.hygiene_total
        + calc.snacks_tax + calc.grocery_tax + calc.hygiene_tax
    )


def test_calculation_is_repeatable():
    selection = {"noodles": 4, "dal": 2, "cream": 1}
    assert calculate_bill(selection) == calculate_bill(selection)


def test_negative_and_unknown_entries_are_ignored():
    calc = calculate_bill({"nutella": -3, "caviar": 2, "soap": 2})
    assert [i.product_key for i in calc.items] == ["soap"]
    assert calc.hygiene_total == 50
    assert calc.snacks_total == 0


def test_no_rounding_is_applied():
    catalog = {"snacks": {"cake": {"name": "Cake Slice", "price": 10.99}}}
    calc = calculate_bill({"cake": 3}, catalog=catalog, tax_rate=0.05)
    assert calc.snacks_tax == 10.99 * 3 * 0.05
    assert calc.snacks_tax != round(calc.snacks_tax, 2)


def test_custom_catalog_and_rate():
    catalog = {"snacks": {"chai": {"name": "Chai", "price": 10}}}
    calc = calculate_bill({"chai": 3, "nutella": 1}, catalog=catalog, tax_rate=0.1)
    assert [i.product_key for i in calc.items] == ["chai"]
    assert calc.snacks_tax == pytest.approx(3)
    assert calc.grand_total == pytest.approx(33)


def test_tax_rate_from_settings(settings):
    settings.BILLING = {**settings.BILLING, "TAX_RATE": 0.18}
    calc = calculate_bill({"tea": 1})
    assert calc.grocery_tax == pytest.approx(54)


def test_to_dict_uses_api_field_names():
    data = calculate_bill({"silk": 1}).to_dict()
    assert data["items"] == [{
        "category": "snacks",
        "productKey": "silk",
        "name": "Dairy Milk Silk",
        "price": 60,
        "quantity": 1,
        "total": 60,
    }]
    assert set(data) == {
        "items", "snacksTotal", "groceryTotal", "hygieneTotal",
        "snacksTax", "groceryTax", "hygieneTax", "grandTotal",
    }


def test_format_currency():
    assert format_currency(296.1) == "₹296.10"
    assert format_currency(0) == "₹0.00"
    assert format_currency(12.5, symbol="Rs ") == "Rs 12.50"


def test_non_numeric_quantities_count_as_zero():
    calc = calculate_bill({"nutella": "2", "soap": [1], "atta": True, "rice": {"n": 1}, "tea": 1})
    assert [i.product_key for i in calc.items] == ["tea"]
    assert calc.snacks_total == 0
    assert calc.hygiene_total == 0
    assert calc.grand_total == pytest.approx(315)


def test_selection_that_is_not_a_mapping():
    calc = calculate_bill(["nutella", 2])
    assert calc.items == []
    assert calc.grand_total == 0
