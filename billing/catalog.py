from typing import Dict, Iterator, Optional, Tuple

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


CATEGORIES = ("snacks", "grocery", "hygiene")

DEFAULT_TAX_RATE = 0.05

# category -> product key -> {"name", "price"}
PRODUCTS = {
    "snacks": {
        "nutella": {"name": "Nutella Choco Spread", "price": 120},
        "noodles": {"name": "Noodles (1 Pack)", "price": 40},
        "lays": {"name": "Lays Chips", "price": 10},
        "oreo": {"name": "Oreo Cookies", "price": 20},
        "muffin": {"name": "Chocolate Muffin", "price": 30},
        "silk": {"name": "Dairy Milk Silk", "price": 60},
        "namkeen": {"name": "Namkeen", "price": 15},
    },
    "grocery": {
        "atta": {"name": "Aashirvaad Atta (1kg)", "price": 42},
        "pasta": {"name": "Pasta (1kg)", "price": 85},
        "rice": {"name": "Basmati Rice (1kg)", "price": 75},
        "oil": {"name": "Sunflower Oil (1ltr)", "price": 120},
        "sugar": {"name": "Refined Sugar (1kg)", "price": 45},
        "dal": {"name": "Daal (1kg)", "price": 90},
        "tea": {"name": "Tea Powder (1kg)", "price": 300},
    },
    "hygiene": {
        "soap": {"name": "Bathing Soap", "price": 25},
        "shampoo": {"name": "Shampoo (1ltr)", "price": 180},
        "lotion": {"name": "Body Lotion (1ltr)", "price": 150},
        "cream": {"name": "Face Cream", "price": 85},
        "foam": {"name": "Shaving Foam", "price": 65},
        "mask": {"name": "Face Mask (1 piece)", "price": 50},
        "sanitizer": {"name": "Hand Sanitizer (50ml)", "price": 35},
    },
}


def _billing_setting(key, default=None):
    return getattr(settings, "BILLING", {}).get(key, default)


def validate_catalog(catalog: Dict) -> Dict:
    """Check a catalog mapping; raises ImproperlyConfigured on bad data."""
    seen = {}
    for category, products in catalog.items():
        if category not in CATEGORIES:
            raise ImproperlyConfigured(f"Unknown product category: {category}")
        if not isinstance(products, dict):
            raise ImproperlyConfigured(f"Category '{category}' must map product keys to products")
        for key, product in products.items():
            if not isinstance(product, dict):
                raise ImproperlyConfigured(f"Product '{key}' must be a mapping with a name and a price")
            if key in seen:
                raise ImproperlyConfigured(
                    f"Product key '{key}' is used in both '{seen[key]}' and '{category}'"
                )
            seen[key] = category
            if "name" not in product or "price" not in product:
                raise ImproperlyConfigured(f"Product '{key}' needs a name and a price")
            price = product["price"]
            if not isinstance(price, (int, float)) or isinstance(price, bool):
                raise ImproperlyConfigured(f"Product '{key}' has a non-numeric price")
            if price < 0:
                raise ImproperlyConfigured(f"Product '{key}' has a negative price")
    return catalog


def get_catalog() -> Dict:
    """Return the active catalog (settings override or the built-in table)."""
    override = _billing_setting("CATALOG")
    if override:
        return validate_catalog(override)
    return PRODUCTS


def get_tax_rate() -> float:
    return float(_billing_setting("TAX_RATE", DEFAULT_TAX_RATE))


def iter_products(catalog: Optional[Dict] = None) -> Iterator[Tuple[str, str, Dict]]:
    """Yield (category, key, product) in fixed category order, then catalog order."""
    catalog = PRODUCTS if catalog is None else catalog
    for category in CATEGORIES:
        for key, product in catalog.get(category, {}).items():
            yield category, key, product


def find_product(key: str, catalog: Optional[Dict] = None) -> Optional[Tuple[str, Dict]]:
    for category, product_key, product in iter_products(catalog):
        if product_key == key:
            return category, product
    return None
