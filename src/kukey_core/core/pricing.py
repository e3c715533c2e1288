"""Server-side item price table.

Clients display these prices and echo them back on purchase; the stated
price must match the entry here exactly.
"""

from __future__ import annotations

from enum import Enum


class ItemCategory(str, Enum):
    """Purchasable item categories."""

    COURSE_REVIEW_READING_TICKET = "COURSE_REVIEW_READING_TICKET"
    CHARACTER_EVOLUTION = "CHARACTER_EVOLUTION"
    CHARACTER_TYPE_CHANGE = "CHARACTER_TYPE_CHANGE"


# Reading tickets are priced by duration in days.
READING_TICKET_PRICES: dict[int, int] = {
    3: 20,
    7: 40,
    30: 100,
}

# Evolution is priced by the level reached after the purchase.
CHARACTER_EVOLUTION_PRICES: dict[int, int] = {
    1: 10,
    2: 20,
    3: 40,
    4: 80,
    5: 160,
}

CHARACTER_TYPE_CHANGE_PRICE = 50

MAX_CHARACTER_LEVEL = max(CHARACTER_EVOLUTION_PRICES)
