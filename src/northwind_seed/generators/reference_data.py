"""Static value pools used by the entity generators."""

from decimal import Decimal

from northwind_seed.sampling import Bucket

TITLES_OF_COURTESY = ["Ms.", "Mrs.", "Dr."]

UNITS_ON_ORDER = [0, 10, 20, 30, 50, 60, 70, 80, 100]

REORDER_LEVELS = [0, 5, 10, 15, 20, 25, 30]

QUANTITY_PER_UNIT = [
    "100 - 100 g pieces",
    "100 - 250 g bags",
    "10 - 200 g glasses",
    "10 - 4 oz boxes",
    "10 - 500 g pkgs.",
    "10 - 500 g pkgs.",
    "10 boxes x 12 pieces",
    "10 boxes x 20 bags",
    "10 boxes x 8 pieces",
    "10 kg pkg.",
    "10 pkgs.",
    "12 - 100 g bars",
    "12 - 100 g pkgs",
    "12 - 12 oz cans",
    "12 - 1 lb pkgs.",
    "12 - 200 ml jars",
    "12 - 250 g pkgs.",
    "12 - 355 ml cans",
    "12 - 500 g pkgs.",
    "750 cc per bottle",
    "5 kg pkg.",
    "50 bags x 30 sausgs.",
    "500 ml",
    "500 g",
    "48 pieces",
    "48 - 6 oz jars",
    "4 - 450 g glasses",
    "36 boxes",
    "32 - 8 oz bottles",
    "32 - 500 g boxes",
]

DISCOUNTS = [Decimal("0.05"), Decimal("0.15"), Decimal("0.2"), Decimal("0.25")]

# Line items per order: long-tailed, most orders are small
ORDER_LINE_BUCKETS = [
    Bucket(0.6, list(range(1, 5))),
    Bucket(0.2, list(range(5, 11))),
    Bucket(0.15, list(range(11, 18))),
    Bucket(0.05, list(range(18, 26))),
]

MAX_ORDER_LINES = max(max(bucket.value) for bucket in ORDER_LINE_BUCKETS)
MAX_LINE_QUANTITY = 130
