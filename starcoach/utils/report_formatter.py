"""
Utility functions for formatting text-based reports and tables.

Provides consistent table formatting for story evaluation and coverage reports.
"""

from typing import Any, Iterable, List


class Column:
    """Column definition for table formatting."""

    def __init__(self, name: str, width: int, align: str = "<"):
        """
        Args:
            name: Column header name
            width: Column width in characters
            align: Alignment ('<' left, '>' right, '^' center)
        """
        self.name = name
        self.width = width
        self.align = align

    def format_header(self) -> str:
        return f"{_truncate(self.name, self.width):{self.align}{self.width}}"

    def format_value(self, value: Any) -> str:
        return f"{_truncate(str(value), self.width):{self.align}{self.width}}"


class TableFormatter:
    """Builder for formatted text reports with aligned columns."""

    def __init__(self, columns: List[Column], total_width: int = 80):
        """
        Args:
            columns: List of Column definitions (may be empty for list-only reports)
            total_width: Total report width for separators
        """
        self.columns = columns
        self.total_width = total_width
        self.lines: List[str] = []

    def add_section_header(self, title: str) -> "TableFormatter":
        """Add section header framed by separator lines."""
        self.lines.append("=" * self.total_width)
        self.lines.append(title)
        self.lines.append("=" * self.total_width)
        return self

    def add_table_header(self) -> "TableFormatter":
        self.lines.append(" ".join(col.format_header() for col in self.columns))
        return self

    def add_separator(self, char: str = "-") -> "TableFormatter":
        self.lines.append(char * self.total_width)
        return self

    def add_row(self, values: List[Any]) -> "TableFormatter":
        """
        Add data row with column values.

        Raises:
            ValueError: If number of values doesn't match columns
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")

        self.lines.append(" ".join(col.format_value(val) for col, val in zip(self.columns, values)))
        return self

    def add_bullet_list(
        self, title: str, items: Iterable[str], marker: str = "-", empty_text: str = "(none)"
    ) -> "TableFormatter":
        """
        Add a titled bullet list (e.g., strengths or warnings).

        Args:
            title: Heading printed above the list
            items: Entries to list, in order
            marker: Bullet marker
            empty_text: Printed instead of bullets when there are no items
        """
        items = list(items)
        self.lines.append(f"{title} ({len(items)}):")
        if not items:
            self.lines.append(f"  {empty_text}")
        for item in items:
            self.lines.append(f"  {marker} {item}")
        return self

    def add_blank_line(self) -> "TableFormatter":
        self.lines.append("")
        return self

    def add_text(self, text: str) -> "TableFormatter":
        self.lines.append(text)
        return self

    def render(self) -> str:
        return "\n".join(self.lines)


def format_score(value: float, maximum: float = None) -> str:
    """
    Format a score without trailing ".0" noise.

    Examples:
        format_score(3) -> "3"
        format_score(3.5, 4) -> "3.5/4"
    """
    text = f"{value:g}"
    if maximum is not None:
        text = f"{text}/{maximum:g}"
    return text


def _truncate(text: str, width: int) -> str:
    """Clip text to width, marking the cut with '~'."""
    if len(text) <= width:
        return text
    if width <= 1:
        return text[:width]
    return text[: width - 1] + "~"
