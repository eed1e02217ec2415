"""
Government dashboard indicators router.

Mounts under ``/api/indicators`` (prefix set in ``main.py``).

Endpoints
---------
GET /        - Budget variance, alert distributions, risk, trend, rankings,
               phase delays and alignment rollups.
GET /export  - The same indicators as an ``.xlsx`` download.

Phase and alignment rollups use the newest ``sample_size`` projects
(``INDICATOR_SAMPLE_SIZE`` by default).
"""

from __future__ import annotations

import io
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from sisag.config import get_settings
from sisag.database import get_db
from sisag.exporters.excel_exporter import XLSX_MEDIA_TYPE
from sisag.schemas.indicators import IndicatorsResponse
from sisag.services import export_service, indicator_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Indicateurs"])


def _sample_size(
    sample_size: Annotated[
        int | None,
        Query(description="Nombre de projets récents échantillonnés.", ge=1, le=500),
    ] = None,
) -> int:
    return sample_size or get_settings().INDICATOR_SAMPLE_SIZE


@router.get(
    "",
    response_model=IndicatorsResponse,
    summary="Indicateurs du tableau de bord",
)
def get_indicators(
    db: Annotated[Session, Depends(get_db)],
    sample_size: Annotated[int, Depends(_sample_size)],
) -> IndicatorsResponse:
    logger.debug("GET /indicators sample_size=%d", sample_size)
    return indicator_service.get_indicators(db, sample_size)


@router.get(
    "/export",
    summary="Exporter les indicateurs (.xlsx)",
    response_class=StreamingResponse,
    responses={
        200: {
            "description": "Classeur Excel généré.",
            "content": {XLSX_MEDIA_TYPE: {}},
        },
        500: {"description": "Erreur lors de la génération du fichier."},
    },
)
def export_indicators(
    db: Annotated[Session, Depends(get_db)],
    sample_size: Annotated[int, Depends(_sample_size)],
) -> StreamingResponse:
    logger.info("GET /indicators/export sample_size=%d", sample_size)
    try:
        file_bytes = export_service.export_indicators(db, sample_size)
    except Exception as exc:
        logger.exception("export_indicators failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Erreur lors de la génération du fichier Excel : {exc}",
        ) from exc

    filename = export_service.export_filename()
    headers = {
        "Content-Disposition": f'attachment; filename="{filename}"',
        "Content-Length": str(len(file_bytes)),
    }
    return StreamingResponse(io.BytesIO(file_bytes), media_type=XLSX_MEDIA_TYPE, headers=headers)
