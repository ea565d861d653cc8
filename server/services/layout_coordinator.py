from typing import List, Optional
from core.allocation.slot_allocator import spread_card_slots, lines_amount
from core.layout.cards_packer import CardsPacker
from core.models.schema import Card, CardsRequest, LayoutResult, SlotsRequest, SlotsResponse
from core.utils.config import Settings


# Marks a parameter the caller did not pass at all, as opposed to an explicit None
UNSET = object()


class LayoutCoordinator:
    """
    Glues HTTP requests to the layout engine.
    Every call builds its own packer, so parallel requests never share a grid.
    """
    def __init__(self, settings: Settings):
        self.settings = settings

    def pack_slots(self, req: SlotsRequest) -> SlotsResponse:
        placements = spread_card_slots(req.sizes, req.slots_per_line, req.max_rows_amount)
        return SlotsResponse(placements=placements, lines_amount=lines_amount(placements))

    def layout_cards(self, cards: List[Card], list_width: float,
                     cards_width: Optional[float] = None,
                     cards_ratio: Optional[float] = None,
                     max_rows_amount=UNSET,
                     card_size_class_prefix: Optional[str] = None) -> LayoutResult:
        packer = CardsPacker(
            cards,
            cards_width=cards_width if cards_width is not None else self.settings.cards_width,
            cards_ratio=cards_ratio if cards_ratio is not None else self.settings.cards_ratio,
            card_size_class_prefix=card_size_class_prefix or self.settings.card_size_class_prefix,
            max_rows_amount=self.settings.max_rows_amount if max_rows_amount is UNSET else max_rows_amount,
        )
        packer.update(list_width)
        return packer.result()

    def layout_request(self, req: CardsRequest) -> LayoutResult:
        return self.layout_cards(
            req.cards, req.list_width,
            cards_width=req.cards_width,
            cards_ratio=req.cards_ratio,
            # An explicit null asks for unbounded rows, a missing field keeps the settings limit
            max_rows_amount=req.max_rows_amount if "max_rows_amount" in req.model_fields_set else UNSET,
            card_size_class_prefix=req.card_size_class_prefix,
        )
