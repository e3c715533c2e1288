"""Point shop: price verification, item effects and the matching debit.

Items form a closed set of variants. Each variant has one handler that
prices it and one that applies its effect; `purchase` composes them with
the ledger debit inside a single unit of work.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Union

from sqlalchemy.orm import Session

from kukey_core.core.exceptions import (
    CharacterNotFoundError,
    InvalidItemMetadataError,
    ItemMetadataMissingError,
    MaxLevelReachedError,
    PersistenceError,
    PriceMismatchError,
    UnknownItemCategoryError,
    UserNotFoundError,
)
from kukey_core.core.pricing import (
    CHARACTER_EVOLUTION_PRICES,
    CHARACTER_TYPE_CHANGE_PRICE,
    READING_TICKET_PRICES,
    ItemCategory,
)
from kukey_core.core.settings import settings
from kukey_core.db.session import run_in_transaction
from kukey_core.db.time import as_utc, utcnow
from kukey_core.models.user import Character
from kukey_core.repositories.user_repo import UserRepository
from kukey_core.services.point_ledger import PointLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadingTicket:
    days: int


@dataclass(frozen=True)
class CharacterEvolution:
    pass


@dataclass(frozen=True)
class CharacterTypeChange:
    pass


Item = Union[ReadingTicket, CharacterEvolution, CharacterTypeChange]


@dataclass(frozen=True)
class ReadingTicketEffect:
    viewable_until: datetime


@dataclass(frozen=True)
class EvolutionEffect:
    level: int


@dataclass(frozen=True)
class TypeChangeEffect:
    character_type: str


Effect = Union[ReadingTicketEffect, EvolutionEffect, TypeChangeEffect]


@dataclass(frozen=True)
class PurchaseResult:
    """Outcome of a completed purchase."""

    effect: Effect
    cost: int
    balance: int


VariantSelector = Callable[[str, Sequence[str]], str]


def random_other_variant(current: str, choices: Sequence[str]) -> str:
    """Pick a character type other than the current one."""
    candidates = [choice for choice in choices if choice != current] or list(choices)
    return random.choice(candidates)


def parse_item(category: ItemCategory | str, metadata: dict[str, Any] | None = None) -> Item:
    """Build the item variant for a request category and its metadata.

    Raises:
        UnknownItemCategoryError: If the category is not sold.
        ItemMetadataMissingError: If a reading ticket has no day count.
        InvalidItemMetadataError: If the day count is not a positive integer.
    """
    metadata = metadata or {}
    try:
        category = ItemCategory(category)
    except ValueError as err:
        raise UnknownItemCategoryError(f"Unknown item category: {category!r}") from err

    if category is ItemCategory.COURSE_REVIEW_READING_TICKET:
        days = metadata.get("days")
        if days is None:
            raise ItemMetadataMissingError("Reading ticket requires 'days'")
        # bool is an int subclass; True must not buy a one-day ticket.
        if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
            raise InvalidItemMetadataError(f"Invalid reading ticket days: {days!r}")
        return ReadingTicket(days=days)
    if category is ItemCategory.CHARACTER_EVOLUTION:
        return CharacterEvolution()
    return CharacterTypeChange()


class ItemShop:
    """Interprets purchase requests against the server-side price table."""

    def __init__(
        self,
        db: Session,
        *,
        ledger: PointLedger | None = None,
        variant_selector: VariantSelector = random_other_variant,
        character_types: Sequence[str] | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.db = db
        self.users = UserRepository(db)
        self.ledger = ledger or PointLedger(db)
        self.variant_selector = variant_selector
        self.character_types = list(character_types or settings.character_types)
        self.clock = clock

    def purchase(
        self,
        user_id: int,
        item_category: ItemCategory | str,
        client_stated_cost: int,
        metadata: dict[str, Any] | None = None,
    ) -> PurchaseResult:
        """Verify the price, apply the item effect and debit the points.

        Effect and debit commit together; if the debit fails the effect is
        rolled back with it.

        Raises:
            PriceMismatchError: If `client_stated_cost` differs from the price table.
            CharacterNotFoundError: If a character item is bought without a character.
            InsufficientPointsError: If the balance does not cover the cost.
        """
        item = parse_item(item_category, metadata)
        return run_in_transaction(
            self.db,
            lambda db: self._purchase(user_id, item, client_stated_cost),
        )

    def _purchase(self, user_id: int, item: Item, client_stated_cost: int) -> PurchaseResult:
        user = self.users.get_for_update(user_id)
        if user is None:
            raise UserNotFoundError()

        character = self._character_for(user_id, item)
        cost = self.price_of(item, character)
        if cost != client_stated_cost:
            logger.warning(
                "Price mismatch for user %s on %s: stated %d, actual %d",
                user_id, type(item).__name__, client_stated_cost, cost,
            )
            raise PriceMismatchError()

        effect, description = self._apply(user_id, item, character)
        balance = self.ledger.adjust(user_id, -cost, description)
        logger.info("User %s bought %s for %d points", user_id, type(item).__name__, cost)
        return PurchaseResult(effect=effect, cost=cost, balance=balance)

    def _character_for(self, user_id: int, item: Item) -> Character | None:
        if isinstance(item, ReadingTicket):
            return None
        character = self.users.get_character(user_id)
        if character is None:
            raise CharacterNotFoundError()
        return character

    @staticmethod
    def price_of(item: Item, character: Character | None = None) -> int:
        """Return the authoritative price of `item`.

        Raises:
            PriceMismatchError: If no reading ticket of that length is sold.
            MaxLevelReachedError: If the character cannot evolve further.
            CharacterNotFoundError: If an evolution is priced without a character.
        """
        if isinstance(item, ReadingTicket):
            price = READING_TICKET_PRICES.get(item.days)
            if price is None:
                raise PriceMismatchError(f"No reading ticket for {item.days} days")
            return price
        if isinstance(item, CharacterEvolution):
            if character is None:
                raise CharacterNotFoundError()
            price = CHARACTER_EVOLUTION_PRICES.get(character.level + 1)
            if price is None:
                raise MaxLevelReachedError()
            return price
        return CHARACTER_TYPE_CHANGE_PRICE

    def _apply(self, user_id: int, item: Item, character: Character | None) -> tuple[Effect, str]:
        if isinstance(item, ReadingTicket):
            return self._extend_reading_ticket(user_id, item.days)
        if character is None:
            raise CharacterNotFoundError()
        if isinstance(item, CharacterEvolution):
            return self._evolve(character)
        return self._change_type(character)

    def _extend_reading_ticket(self, user_id: int, days: int) -> tuple[Effect, str]:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        now = self.clock()
        current = as_utc(user.viewable_until)
        base = current if current is not None and current > now else now
        viewable_until = base + timedelta(days=days)
        if not self.users.set_viewable_until(user_id, viewable_until):
            raise PersistenceError("Viewable period update failed")
        return ReadingTicketEffect(viewable_until=viewable_until), f"Reading course reviews - {days} days"

    def _evolve(self, character: Character) -> tuple[Effect, str]:
        character.level += 1
        self.db.flush()
        return EvolutionEffect(level=character.level), f"Evolving characters level {character.level}"

    def _change_type(self, character: Character) -> tuple[Effect, str]:
        character.type = self.variant_selector(character.type, self.character_types)
        self.db.flush()
        return TypeChangeEffect(character_type=character.type), "Changing character types"
