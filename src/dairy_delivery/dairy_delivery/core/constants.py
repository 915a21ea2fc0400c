"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MILK = "Milk"
DEFAULT_MILK_PRICE = 58.0

# Products always listed in product statistics, even with no sales.
STANDARD_PRODUCTS = ("Milk", "Curd", "Ghee", "Paneer")

DEFAULT_SHIFT = "Morning"

BUSINESS_NAME = "Agaram Milk"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
