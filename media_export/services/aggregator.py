"""
Export aggregator - running totals and report rows grouped by asset source.
"""

from typing import NamedTuple


class ReportRow(NamedTuple):
    """One line of the export report table."""

    identifier: str
    filename: str
    size: str


class ExportAggregator:
    """
    Collects report rows per asset source.

    Groups keep the order in which their source was first seen; rows keep
    export order. Only lightweight rows are kept, never asset content.
    """

    def __init__(self):
        self.rows_by_source: dict[str, list[ReportRow]] = {}
        self.exported_count = 0
        self.exported_total_bytes = 0

    def record(self, asset_source_identifier: str, row: ReportRow, byte_size: int) -> None:
        self.rows_by_source.setdefault(asset_source_identifier, []).append(row)
        self.exported_count += 1
        self.exported_total_bytes += byte_size

    @property
    def has_exports(self) -> bool:
        return self.exported_count > 0
