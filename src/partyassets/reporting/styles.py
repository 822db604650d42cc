from openpyxl.styles import Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet


class FailureReportStyle:
    """
    Visual language of the failed-rows report: gray header, red failure details.
    """

    HEADER_BG = "C0C0C0"  # Gray
    DETAIL_TEXT = "FF0000"  # Red

    @staticmethod
    def apply_header_style(cell):
        cell.fill = PatternFill(
            start_color=FailureReportStyle.HEADER_BG,
            end_color=FailureReportStyle.HEADER_BG,
            fill_type="solid",
        )

    @staticmethod
    def apply_detail_style(cell):
        cell.font = Font(color=FailureReportStyle.DETAIL_TEXT)

    @staticmethod
    def auto_size_columns(ws: Worksheet, max_width: int = 50):
        """Simple auto-size heuristic, capped at max_width."""
        for col in ws.columns:
            cells = list(col)
            if not cells:
                continue
            max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in cells)
            ws.column_dimensions[cells[0].column_letter].width = min((max_length + 2) * 1.2, max_width)
