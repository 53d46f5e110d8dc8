"""
PDF export of a class timetable.

Renders a ClassGrid (see service.grid) so the exported document shows exactly
the rows and merged break cells of the on-screen grid.
"""
from datetime import datetime
from typing import List, Optional, Tuple
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from models.schemas import ClassGrid, GridCell, RowType
from config import settings
import io
import logging

logger = logging.getLogger(__name__)

BREAK_FILL = colors.Color(230 / 255, 240 / 255, 255 / 255)
BREAK_TEXT = colors.Color(0, 102 / 255, 204 / 255)
GRID_LINE = colors.Color(200 / 255, 200 / 255, 200 / 255)
HEADER_LINE = colors.Color(150 / 255, 150 / 255, 150 / 255)


def export_filename(class_name: str) -> str:
    return f"{class_name}_Timetable.pdf"


def cell_text(cell: GridCell) -> str:
    """Text of a normal cell: subject with the teacher below, or '-' when empty."""
    if cell.slot is None:
        return "-"
    if cell.slot.teacher and cell.slot.teacher != settings.no_teacher_label:
        return f"{cell.slot.subject}\n({cell.slot.teacher})"
    return cell.slot.subject


def build_table_data(grid: ClassGrid) -> Tuple[List[List[str]], List[tuple]]:
    """
    Table rows and style commands for a class grid.

    Break rows keep the time in the first column and put the label in the
    second column spanned across all day columns.
    """
    n_days = len(grid.days)
    table_data = [["Time"] + list(grid.days)]
    style_list = [
        ("GRID", (0, 0), (-1, -1), 0.25, GRID_LINE),
        ("LINEBELOW", (0, 0), (-1, 0), 0.5, HEADER_LINE),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (0, 1), (0, -1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]

    for row_idx, row in enumerate(grid.rows, start=1):
        if row.row_type == RowType.BREAK:
            table_data.append([row.time, row.label] + [""] * max(n_days - 1, 0))
            if n_days > 1:
                style_list.append(("SPAN", (1, row_idx), (-1, row_idx)))
            style_list.extend([
                ("BACKGROUND", (1, row_idx), (-1, row_idx), BREAK_FILL),
                ("TEXTCOLOR", (1, row_idx), (-1, row_idx), BREAK_TEXT),
                ("FONTNAME", (1, row_idx), (-1, row_idx), "Helvetica-Bold"),
            ])
        else:
            table_data.append([row.time] + [cell_text(cell) for cell in row.cells])

    return table_data, style_list


def export_class_grid_pdf(grid: ClassGrid, generated_on: Optional[datetime] = None) -> bytes:
    """
    Render a class grid as a landscape PDF.

    Args:
        grid: Grid built by service.grid.build_class_grid
        generated_on: Date printed under the title, defaults to now

    Returns:
        The PDF document as bytes
    """
    generated_on = generated_on or datetime.now()
    output = io.BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=landscape(A4),
        topMargin=0.5 * inch,
        bottomMargin=0.5 * inch,
        leftMargin=0.5 * inch,
        rightMargin=0.5 * inch
    )
    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"{settings.pdf_title_prefix} - {grid.class_name}", styles["Title"]),
        Paragraph(f"Generated on {generated_on.strftime('%d/%m/%Y')}", styles["Normal"]),
        Spacer(1, 0.2 * inch),
    ]

    table_data, style_list = build_table_data(grid)
    n_days = len(grid.days)
    time_col_width = 1.2 * inch
    day_col_width = (doc.width - time_col_width) / n_days if n_days else doc.width - time_col_width
    table = Table(table_data, repeatRows=1, colWidths=[time_col_width] + [day_col_width] * n_days)
    table.setStyle(TableStyle(style_list))
    elements.append(table)

    doc.build(elements)
    logger.info(f"Exported timetable PDF for {grid.class_name} ({len(grid.rows)} rows)")
    return output.getvalue()
