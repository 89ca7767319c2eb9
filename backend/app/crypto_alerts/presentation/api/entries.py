"""Catalog API endpoint.

GET /api/entries serves the entry catalog, refreshing it from the quote
source when the cached copy is older than the source's list interval.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.crypto_alerts.application.dto.entry_dto import EntryDTO, EntryListDTO
from app.crypto_alerts.application.exceptions import SourceUnavailableError
from app.crypto_alerts.container import ServiceContainer
from app.crypto_alerts.presentation.api.dependencies import get_container

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/entries", response_model=EntryListDTO)
async def list_entries(
    container: ServiceContainer = Depends(get_container),
) -> EntryListDTO:
    """Get the watchable entries with their latest quotes.

    When the source fails, the last good catalog is returned flagged as stale.

    Raises:
        HTTPException: 503 if the source failed and no catalog was ever loaded.
    """
    catalog = container.catalog
    stale = False

    try:
        entries = await catalog.list()
    except SourceUnavailableError as e:
        if len(catalog) == 0:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=e.message,
            ) from e
        logger.warning(f"Serving stale catalog: {e.message}")
        entries = await catalog.snapshot()
        stale = True

    return EntryListDTO(
        entries=[EntryDTO.from_entry(entry) for entry in entries],
        total=len(entries),
        stale=stale,
        next_refresh_at=catalog.next_refresh_at,
    )
