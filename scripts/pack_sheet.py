import json
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.ingest.card_sheet import CardSheetReader
from core.utils.config import settings
from server.services.layout_coordinator import LayoutCoordinator


def pack_sheet(excel_path, list_width, sheet_name=None):
    print(f"Packing cards from {excel_path} for a {list_width}px list...", file=sys.stderr)
    cards = CardSheetReader().read(excel_path, sheet_name=sheet_name)
    result = LayoutCoordinator(settings).layout_cards(cards, list_width)
    return result.model_dump()


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python scripts/pack_sheet.py <cards.xlsx> <list_width_px> [sheet_name]")
        sys.exit(1)

    sheet = sys.argv[3] if len(sys.argv) > 3 else None
    output = pack_sheet(sys.argv[1], float(sys.argv[2]), sheet)
    print(json.dumps(output, indent=2, ensure_ascii=False))
