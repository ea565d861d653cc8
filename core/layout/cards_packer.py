import logging
from typing import Dict, List, Optional
from core.allocation.shape import clamp_size, round_half_up
from core.allocation.slot_allocator import spread_card_slots, lines_amount
from core.models.schema import Card, CardStyle, LayoutResult

logger = logging.getLogger(__name__)

DEFAULT_SIZE_CLASS_PREFIX = "news__cardSize-"


def apply_size_class(class_name: str, prefix: str, height) -> str:
    """Drops every class starting with prefix and adds prefix+height for cards taller than one slot."""
    size = round_half_up(height)
    classes = [c for c in class_name.split() if not c.startswith(prefix)]
    if size > 1:
        classes.append(f"{prefix}{size}")
    return " ".join(classes)


def _percent(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value)}%"
    return f"{value!r}%"


def _round_max_rows(max_rows_amount) -> Optional[int]:
    if isinstance(max_rows_amount, bool) or not isinstance(max_rows_amount, (int, float)):
        return None
    return round_half_up(max_rows_amount)


class CardsPacker:
    """
    Keeps a list of cards laid out for a given list width.

    The allocation pass only reruns when the amount of cards per line actually
    changes; a width change that keeps the same cards per line only rescales the
    list height. Styles are plain data, rendering them is up to the caller.
    """
    def __init__(self, cards: List[Card], cards_width: float, cards_ratio: float,
                 card_size_class_prefix: Optional[str] = None, max_rows_amount=None):
        self.cards_width = max(cards_width, 1)
        self.cards_ratio = max(cards_ratio, 0)
        self.card_size_class_prefix = str(card_size_class_prefix) if card_size_class_prefix else DEFAULT_SIZE_CLASS_PREFIX
        self.max_rows_amount = _round_max_rows(max_rows_amount)

        self.last_checked_width: Optional[float] = None
        self.last_displayed_cards_per_line: Optional[int] = None
        self.last_displayed_lines_amount: Optional[int] = None
        self.list_height: Optional[int] = None

        self._all_cards: List[Card] = []
        self.cards: List[Card] = []
        self._styles: List[CardStyle] = []
        self.init(cards)

    def init(self, cards: Optional[List[Card]] = None):
        """Reloads the card list (hidden cards are left out) without laying it out."""
        self.last_checked_width = None
        self.last_displayed_cards_per_line = None

        if cards is not None:
            ids = [c.id for c in cards]
            if len(set(ids)) != len(ids):
                raise ValueError("Card ids must be unique")
            self._all_cards = list(cards)
        # Visibility may have changed since the last call, so filter the full list again
        self.cards = [c for c in self._all_cards if not c.hidden]
        self._styles = [CardStyle(class_name=c.class_name) for c in self.cards]

    def update(self, list_width: float) -> bool:
        """
        Lays the cards out for the given list width (if needed).
        Returns True when the slots were recalculated.
        """
        if list_width == self.last_checked_width:
            return False

        cards_per_line = max(round_half_up(list_width / self.cards_width), 1)
        recalculated = False

        if cards_per_line != self.last_displayed_cards_per_line:
            sizes = [clamp_size(c.size, cards_per_line) for c in self.cards]
            positions = spread_card_slots(sizes, cards_per_line, self.max_rows_amount)
            lines = lines_amount(positions)

            for index, position in enumerate(positions):
                style = self._styles[index]
                if position is not None:
                    self._styles[index] = CardStyle(
                        visibility="",
                        z_index=None,
                        width=_percent(position.width / cards_per_line * 100),
                        height=_percent(position.height / lines * 100),
                        left=_percent(position.x / cards_per_line * 100),
                        top=_percent(position.y / lines * 100),
                        class_name=apply_size_class(style.class_name, self.card_size_class_prefix, position.height),
                    )
                else:
                    self._styles[index] = CardStyle(
                        visibility="hidden", z_index=-1,
                        width="0", height="0", left="0", top="0",
                        class_name=style.class_name,
                    )

            hidden = sum(1 for p in positions if p is None)
            if hidden:
                logger.debug(f"{hidden} of {len(positions)} cards did not fit and are hidden")

            self.last_checked_width = list_width
            self.last_displayed_cards_per_line = cards_per_line
            self.last_displayed_lines_amount = lines
            recalculated = True

        # Pixels rather than percents: the list box may be narrower than its parent
        lines = self.last_displayed_lines_amount or 0
        self.list_height = round_half_up(lines / cards_per_line * self.cards_ratio * list_width)
        return recalculated

    def set_cards_width(self, width: float):
        """New desired single card width in pixels. Takes effect on the next update()."""
        self.cards_width = max(width, 1)
        self.last_checked_width = None
        self.last_displayed_cards_per_line = None
        self.last_displayed_lines_amount = None

    def set_cards_ratio(self, ratio: float):
        """New card height/width ratio. Only the list height changes on the next update()."""
        self.cards_ratio = max(ratio, 0)
        self.last_checked_width = None

    def set_max_rows_amount(self, max_rows_amount):
        self.max_rows_amount = _round_max_rows(max_rows_amount)
        self.last_checked_width = None
        self.last_displayed_cards_per_line = None
        self.last_displayed_lines_amount = None

    def destroy(self):
        """Forgets all computed geometry. Size classes stay as they are."""
        self._styles = [CardStyle(class_name=s.class_name) for s in self._styles]
        self.list_height = None
        self.last_checked_width = None
        self.last_displayed_cards_per_line = None
        self.last_displayed_lines_amount = None

    @property
    def cards_per_line(self) -> Optional[int]:
        return self.last_displayed_cards_per_line

    @property
    def lines_amount(self) -> Optional[int]:
        return self.last_displayed_lines_amount

    @property
    def styles(self) -> Dict[str, CardStyle]:
        return {card.id: style for card, style in zip(self.cards, self._styles)}

    def result(self) -> LayoutResult:
        return LayoutResult(
            cards_per_line=self.last_displayed_cards_per_line or 0,
            lines_amount=self.last_displayed_lines_amount or 0,
            list_height=self.list_height or 0,
            styles=self.styles,
        )
