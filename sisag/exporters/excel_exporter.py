"""
Excel export helper wrapping xlsxwriter.

Provides ``ExcelExporter``, a stateful builder that lays out a styled SISAG
workbook in memory and returns its bytes for streaming via FastAPI's
``StreamingResponse``.

Usage example::

    exporter = ExcelExporter(title="Indicateurs", filters={"Échantillon": "10"})
    exporter.add_header()
    exporter.add_kpi_row({"Projets": 12, "Écart budgétaire (%)": 4.5})
    exporter.add_section("Top secteurs")
    exporter.add_data_table(["Secteur", "Projets"], [["Santé", 4]])
    file_bytes = exporter.finalize()

Design notes
------------
- Sections are stacked vertically on a single worksheet; each
  ``add_data_table`` call widens columns as needed but never shrinks them.
- Column widths are capped at 60 characters.
- Numeric cells use ``#,##0.00``.
"""

from __future__ import annotations

import io
from datetime import datetime, timezone
from typing import Any, Sequence

import xlsxwriter
from xlsxwriter.workbook import Workbook
from xlsxwriter.worksheet import Worksheet

_COLOR_PRIMARY = "#0B5394"
_COLOR_SECTION_BG = "#1E3A5F"
_COLOR_WHITE = "#FFFFFF"
_COLOR_LIGHT_GREY = "#F3F4F6"
_COLOR_BORDER = "#E5E7EB"

_MAX_COL_WIDTH = 60
_MIN_COL_WIDTH = 10
_HEADER_SPAN = 6

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ExcelExporter:
    """Single-sheet workbook builder for SISAG exports.

    Args:
        title: Title shown in the banner row, e.g. ``"Indicateurs"``.
        filters: Labels of the parameters the export was built with.
        sheet_name: Worksheet tab name.
    """

    def __init__(
        self,
        title: str,
        filters: dict[str, str] | None = None,
        sheet_name: str = "Indicateurs",
    ) -> None:
        self._title = title
        self._filters = filters or {}

        self._buffer = io.BytesIO()
        self._workbook: Workbook = xlsxwriter.Workbook(self._buffer, {"in_memory": True})
        self._worksheet: Worksheet = self._workbook.add_worksheet(sheet_name)

        self._current_row: int = 0
        self._col_widths: dict[int, int] = {}
        self._formats: dict[str, Any] = self._build_formats()

    # -----------------------------------------------------------------------
    # Format factory
    # -----------------------------------------------------------------------

    def _build_formats(self) -> dict[str, Any]:
        wb = self._workbook
        cell = {"font_size": 9, "valign": "vcenter", "border": 1, "border_color": _COLOR_BORDER}
        return {
            "banner": wb.add_format({
                "bold": True, "font_size": 16, "font_color": _COLOR_WHITE,
                "bg_color": _COLOR_PRIMARY, "align": "center", "valign": "vcenter",
            }),
            "subtitle": wb.add_format({
                "font_size": 10, "font_color": _COLOR_WHITE,
                "bg_color": _COLOR_SECTION_BG, "align": "center", "valign": "vcenter",
            }),
            "filter_key": wb.add_format({
                "bold": True, "font_size": 9, "bg_color": _COLOR_BORDER, "align": "right",
            }),
            "filter_value": wb.add_format({"font_size": 9, "align": "left"}),
            "section": wb.add_format({
                "bold": True, "font_size": 11, "font_color": _COLOR_PRIMARY, "bottom": 2,
                "bottom_color": _COLOR_PRIMARY,
            }),
            "kpi_label": wb.add_format({
                "bold": True, "font_size": 10, "bg_color": "#EFF6FF", "align": "center",
                "border": 1, "border_color": "#BFDBFE", "text_wrap": True,
            }),
            "kpi_value": wb.add_format({
                "bold": True, "font_size": 12, "font_color": _COLOR_PRIMARY,
                "bg_color": "#EFF6FF", "align": "center", "num_format": "#,##0.00",
                "border": 1, "border_color": "#BFDBFE",
            }),
            "col_header": wb.add_format({
                "bold": True, "font_size": 10, "font_color": _COLOR_WHITE,
                "bg_color": _COLOR_SECTION_BG, "align": "center", "valign": "vcenter",
                "border": 1, "text_wrap": True,
            }),
            "text": wb.add_format({**cell, "align": "left"}),
            "text_alt": wb.add_format({**cell, "align": "left", "bg_color": _COLOR_LIGHT_GREY}),
            "number": wb.add_format({**cell, "align": "right", "num_format": "#,##0.00"}),
            "number_alt": wb.add_format({
                **cell, "align": "right", "num_format": "#,##0.00",
                "bg_color": _COLOR_LIGHT_GREY,
            }),
        }

    def _track_width(self, col: int, value: Any) -> None:
        text = "" if value is None else str(value)
        current = self._col_widths.get(col, _MIN_COL_WIDTH)
        self._col_widths[col] = min(_MAX_COL_WIDTH, max(current, len(text) + 2))

    # -----------------------------------------------------------------------
    # Public builder methods
    # -----------------------------------------------------------------------

    def add_header(self) -> "ExcelExporter":
        """Write the banner, the generation timestamp and one row per filter."""
        ws = self._worksheet
        last_col = _HEADER_SPAN - 1

        ws.set_row(self._current_row, 32)
        ws.merge_range(
            self._current_row, 0, self._current_row, last_col,
            f"SISAG - {self._title}", self._formats["banner"],
        )
        self._current_row += 1

        generated = datetime.now(timezone.utc).strftime("%d/%m/%Y %H:%M UTC")
        ws.merge_range(
            self._current_row, 0, self._current_row, last_col,
            f"Généré le {generated}", self._formats["subtitle"],
        )
        self._current_row += 1

        for key, value in self._filters.items():
            ws.write(self._current_row, 0, key, self._formats["filter_key"])
            ws.merge_range(
                self._current_row, 1, self._current_row, last_col,
                value, self._formats["filter_value"],
            )
            self._track_width(0, key)
            self._current_row += 1

        self._current_row += 1
        return self

    def add_kpi_row(self, kpis: dict[str, Any]) -> "ExcelExporter":
        """Write labels on one row and their values on the row below.

        Args:
            kpis: Ordered ``{label: value}`` pairs.

        Returns:
            ``self`` for method chaining.
        """
        ws = self._worksheet
        ws.set_row(self._current_row, 28)
        ws.set_row(self._current_row + 1, 22)
        for col, (label, value) in enumerate(kpis.items()):
            ws.write(self._current_row, col, label, self._formats["kpi_label"])
            ws.write(self._current_row + 1, col, value, self._formats["kpi_value"])
            self._track_width(col, label)
        self._current_row += 3
        return self

    def add_section(self, title: str) -> "ExcelExporter":
        self._worksheet.write(self._current_row, 0, title, self._formats["section"])
        self._current_row += 1
        return self

    def add_data_table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
    ) -> "ExcelExporter":
        """Write a table with alternating row shading.

        Numeric cells (``int`` or ``float``, not ``bool``) are right-aligned
        with the number format; everything else is written as text.

        Args:
            headers: Column header strings.
            rows: Data rows, each the same length as ``headers``.

        Returns:
            ``self`` for method chaining.
        """
        ws = self._worksheet
        ws.set_row(self._current_row, 20)
        for col, header in enumerate(headers):
            ws.write(self._current_row, col, header, self._formats["col_header"])
            self._track_width(col, header)
        self._current_row += 1

        for index, row in enumerate(rows):
            alt = index % 2 == 1
            for col, value in enumerate(row):
                numeric = isinstance(value, (int, float)) and not isinstance(value, bool)
                if numeric:
                    fmt = self._formats["number_alt" if alt else "number"]
                else:
                    fmt = self._formats["text_alt" if alt else "text"]
                    value = "" if value is None else str(value)
                ws.write(self._current_row, col, value, fmt)
                self._track_width(col, value)
            self._current_row += 1

        self._current_row += 1
        return self

    def finalize(self) -> bytes:
        """Apply column widths, close the workbook and return its bytes.

        The exporter must not be reused afterwards.
        """
        for col, width in self._col_widths.items():
            self._worksheet.set_column(col, col, width)
        self._workbook.close()
        self._buffer.seek(0)
        return self._buffer.read()
