import os
import shutil
import tempfile
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from typing import Optional
from core.ingest.card_sheet import CardSheetReader
from core.models.schema import CardsRequest, LayoutResult, SlotsRequest, SlotsResponse
from core.utils.config import get_settings
from server.services.layout_coordinator import LayoutCoordinator

router = APIRouter(prefix="/layout", tags=["Layout"])


def get_coordinator() -> LayoutCoordinator:
    return LayoutCoordinator(get_settings())


@router.post("/slots", response_model=SlotsResponse)
def pack_slots(req: SlotsRequest, coordinator: LayoutCoordinator = Depends(get_coordinator)):
    """
    Raw slot allocation: footprint sizes in, slot rectangles out.
    null in 'placements' means the card does not fit under max_rows_amount.
    """
    return coordinator.pack_slots(req)


@router.post("/cards", response_model=LayoutResult)
def layout_cards(req: CardsRequest, coordinator: LayoutCoordinator = Depends(get_coordinator)):
    """
    Full card layout for a list of the given pixel width.
    Unset geometry parameters fall back to the server settings.
    """
    return coordinator.layout_request(req)


@router.post("/sheet", response_model=LayoutResult)
def layout_sheet(list_width: float,
                 file: UploadFile = File(...),
                 sheet_name: Optional[str] = None,
                 header_row: int = 1,
                 coordinator: LayoutCoordinator = Depends(get_coordinator)):
    """Same as /cards, with the card list read from an uploaded .xlsx file."""
    ext = os.path.splitext(file.filename or "")[1] or ".xlsx"
    fd, temp_path = tempfile.mkstemp(suffix=ext)
    os.close(fd)
    try:
        with open(temp_path, "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)
        try:
            cards = CardSheetReader().read(temp_path, sheet_name=sheet_name, header_row=header_row)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=400, detail=f"Could not read workbook: {e}")
    finally:
        os.remove(temp_path)

    return coordinator.layout_cards(cards, list_width)
