"""Suggestion lists for units, categories and diets.

Units and categories are open strings; these lists only feed autocomplete.
"""

UNIT_OPTIONS = ["pcs", "kg", "g", "L", "ml", "lb", "oz", "dozen"]

CATEGORY_OPTIONS = [
    "Produce",
    "Meat",
    "Dairy",
    "Bakery",
    "Frozen",
    "Canned",
    "Dry Goods",
    "Beverages",
    "Snacks",
    "Other",
]

DIET_OPTIONS = ["None", "Vegetarian", "Vegan", "Keto", "Paleo", "Gluten-Free"]

SUGGESTION_KINDS = {
    "unit": UNIT_OPTIONS,
    "category": CATEGORY_OPTIONS,
    "diet": DIET_OPTIONS,
}


def suggest(options: list[str], prefix: str = "", limit: int = 10) -> list[str]:
    """Options starting with prefix (case-insensitive), known order preserved."""
    needle = prefix.lower().strip()
    matches = [option for option in options if option.lower().startswith(needle)]
    return matches[: max(limit, 0)]

