"""
Export service layer.

Turns the indicator dashboard payload into an ``.xlsx`` workbook.  Data is
fetched through ``indicator_service.get_indicators`` so the export always
matches ``GET /indicators`` for the same sample size.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from sisag.exporters.excel_exporter import ExcelExporter
from sisag.schemas.indicators import IndicatorsResponse, RankedItem
from sisag.services import indicator_service

logger = logging.getLogger(__name__)


def _ranked_rows(items: list[RankedItem]) -> list[list]:
    return [[item.name, item.value] for item in items]


def build_indicators_workbook(indicators: IndicatorsResponse) -> bytes:
    """Lay out an ``IndicatorsResponse`` as a single-sheet workbook.

    Args:
        indicators: Payload computed by ``indicator_service.get_indicators``.

    Returns:
        Raw bytes of the ``.xlsx`` file.
    """
    exporter = ExcelExporter(
        title="Indicateurs des projets",
        filters={
            "Projets": str(indicators.project_count),
            "Échantillon (phases, alignement)": str(indicators.sample_size),
        },
    )
    exporter.add_header()

    budget = indicators.budget
    exporter.add_kpi_row({
        "Budget total": budget.total_budget,
        "Dépensé": budget.total_spent,
        "Écart": budget.variance,
        "Écart (%)": budget.variance_percent,
        "Projets à risque": indicators.risk.count,
        "Taux de risque (%)": indicators.risk.rate,
    })

    exporter.add_section("Alertes par sévérité")
    severities = ("low", "medium", "high", "critical")
    exporter.add_data_table(
        ["Sévérité", "Alertes projet", "Alertes de planification"],
        [
            [
                level,
                getattr(indicators.alert_severity, level),
                getattr(indicators.planning_alert_severity, level),
            ]
            for level in severities
        ],
    )

    exporter.add_section("Tendance mensuelle des alertes")
    exporter.add_data_table(
        ["Mois", "Alertes"],
        [[m.month, m.count] for m in indicators.monthly_alert_trend],
    )

    exporter.add_section("Top secteurs (nombre de projets)")
    exporter.add_data_table(["Secteur", "Projets"], _ranked_rows(indicators.top_sectors))

    exporter.add_section("Top provinces (nombre de projets)")
    exporter.add_data_table(["Province", "Projets"], _ranked_rows(indicators.top_provinces))

    exporter.add_section("Top secteurs (montant dépensé)")
    exporter.add_data_table(
        ["Secteur", "Dépensé"], _ranked_rows(indicators.top_sectors_by_spent)
    )

    delays = indicators.phase_delays
    alignment = indicators.alignment
    exporter.add_section("Phases et alignement (échantillon)")
    exporter.add_data_table(
        ["Indicateur", "Valeur"],
        [
            ["Phases suivies", delays.total],
            ["Phases en retard", delays.delayed],
            ["Taux de retard (%)", delays.rate],
            ["Projets évalués", alignment.count],
            ["Score d'alignement moyen", alignment.avg_score],
            ["Projets alignés (%)", alignment.aligned_percent],
        ],
    )

    return exporter.finalize()


def export_indicators(db: Session, sample_size: int) -> bytes:
    indicators = indicator_service.get_indicators(db, sample_size)
    file_bytes = build_indicators_workbook(indicators)
    logger.info(
        "export_indicators: projects=%d sample=%d bytes=%d",
        indicators.project_count, indicators.sample_size, len(file_bytes),
    )
    return file_bytes


def export_filename(prefix: str = "indicateurs") -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M")
    return f"sisag_{prefix}_{stamp}.xlsx"
