from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Placement(BaseModel):
    """Top-left corner and size of a placed card, in slots."""
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int
    height: int

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def right(self) -> int:
        return self.x + self.width

    def overlaps(self, other: "Placement") -> bool:
        return not (self.right <= other.x or other.right <= self.x or
                    self.bottom <= other.y or other.bottom <= self.y)


class Card(BaseModel):
    """
    One entry of the card list. 'size' is the raw footprint as it came from the
    source (sheet cell, request body) and is clamped only when laid out.
    """
    id: str
    size: Optional[float] = 1
    hidden: bool = False
    class_name: str = ""


class CardStyle(BaseModel):
    """Absolute positioning of a card inside the list, in percents of the list box."""
    visibility: str = ""
    z_index: Optional[int] = None
    width: str = ""
    height: str = ""
    left: str = ""
    top: str = ""
    class_name: str = ""


class LayoutResult(BaseModel):
    cards_per_line: int
    lines_amount: int
    list_height: int
    styles: Dict[str, CardStyle] = Field(default_factory=dict)


class SlotsRequest(BaseModel):
    sizes: List[Optional[float]]
    slots_per_line: int = Field(ge=1)
    max_rows_amount: Optional[int] = Field(default=None, ge=0)


class SlotsResponse(BaseModel):
    placements: List[Optional[Placement]]
    lines_amount: int


class CardsRequest(BaseModel):
    cards: List[Card]
    list_width: float = Field(ge=0)
    cards_width: Optional[float] = None
    cards_ratio: Optional[float] = None
    max_rows_amount: Optional[float] = None
    card_size_class_prefix: Optional[str] = None

    @field_validator("cards")
    @classmethod
    def unique_ids(cls, cards: List[Card]) -> List[Card]:
        seen = set()
        for card in cards:
            if card.id in seen:
                raise ValueError(f"Duplicate card id: {card.id}")
            seen.add(card.id)
        return cards
