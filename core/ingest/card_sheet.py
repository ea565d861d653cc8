import os
import logging
import openpyxl
from typing import List, Optional
from core.models.schema import Card

logger = logging.getLogger(__name__)

TRUTHY = {"1", "yes", "y", "true", "x", "ano"}


class CardSheetReader:
    """
    Reads the card list from an .xlsx sheet.

    The header row must contain a 'size' column; 'id', 'hidden' and 'class'
    columns are optional. Row order is the display order.
    """
    def _find_columns(self, header_cells) -> dict:
        columns = {}
        for idx, h in enumerate(header_cells):
            if h is None:
                continue
            name = str(h).strip().lower()
            if name and name not in columns:
                columns[name] = idx
        if "size" not in columns:
            raise ValueError("Header row has no 'size' column")
        return columns

    def _is_truthy(self, value) -> bool:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in TRUTHY

    def _to_id(self, value) -> str:
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()

    def _to_size(self, value) -> Optional[float]:
        if value is None:
            return None
        try:
            return float(str(value).replace(',', '.'))
        except ValueError:
            # Unreadable sizes fall back to a single slot when laid out
            return None

    def read(self, file_path: str, sheet_name: str = None, header_row: int = 1) -> List[Card]:
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")

        wb = openpyxl.load_workbook(file_path, read_only=True, data_only=True)
        try:
            if sheet_name:
                if sheet_name not in wb.sheetnames:
                    raise ValueError(f"Sheet '{sheet_name}' not found")
                sheet = wb[sheet_name]
            else:
                sheet = wb.worksheets[0]

            rows = sheet.iter_rows(min_row=header_row, values_only=True)
            header = next(rows, None)
            if header is None:
                raise ValueError(f"Sheet '{sheet.title}' has no header row {header_row}")
            columns = self._find_columns(header)

            def cell(row, name):
                idx = columns.get(name)
                if idx is None or idx >= len(row):
                    return None
                return row[idx]

            cards = []
            seen_ids = set()
            for offset, row in enumerate(rows, start=header_row + 1):
                raw_id = cell(row, "id")
                raw_size = cell(row, "size")
                card_id = self._to_id(raw_id) if raw_id is not None else ""
                if not card_id and raw_size is None:
                    continue
                card_id = card_id or f"card_{offset}"
                if card_id in seen_ids:
                    raise ValueError(f"Duplicate card id '{card_id}' in row {offset}")
                seen_ids.add(card_id)
                cards.append(Card(
                    id=card_id,
                    size=self._to_size(raw_size),
                    hidden=self._is_truthy(cell(row, "hidden")),
                    class_name=str(cell(row, "class") or "").strip(),
                ))
        finally:
            wb.close()

        logger.info(f"Loaded {len(cards)} cards from {os.path.basename(file_path)} [{sheet.title}]")
        return cards
