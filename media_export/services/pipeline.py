"""
Export pipeline - drives one export run from repository scan to final report.

Flow: stream reader -> filters -> exporter -> aggregator -> report sink.
Assets are pulled and handled one at a time; a failing asset is logged and
skipped, only a directory bootstrap failure aborts the run.
"""

import enum
import logging
from dataclasses import dataclass, field

from media_export.core.exceptions import (
    PipelineStateError,
    SourceReadError,
    WriteError,
)
from media_export.core.sizes import bytes_to_size_string, padded_size_string
from media_export.models.asset import Asset
from media_export.services.aggregator import ExportAggregator, ReportRow
from media_export.services.asset_stream import AssetStreamReader
from media_export.services.exporter import AssetExporter
from media_export.services.filters import ExportCriteria, should_include
from media_export.services.report import ReportSink

logger = logging.getLogger(__name__)

REPORT_HEADERS = ("Asset identifier", "Filename", "Size")


class PipelineState(str, enum.Enum):
    """Lifecycle of a single export run."""
    IDLE = "idle"
    SCANNING = "scanning"
    FINALIZING = "finalizing"
    DONE = "done"


@dataclass
class ExportSummary:
    """Outcome of an export run."""

    scanned: int = 0
    exported_count: int = 0
    exported_total_bytes: int = 0
    failed: int = 0
    rows_by_source: dict[str, list[ReportRow]] = field(default_factory=dict)


def is_exportable(asset: object) -> bool:
    """True for assets that have a resource and an asset source."""
    return (
        isinstance(asset, Asset)
        and asset.resource is not None
        and bool(asset.asset_source_identifier)
    )


class ExportPipeline:
    """
    Runs one export. Instances are single-use: ``run`` may be called once.
    """

    def __init__(
        self,
        reader: AssetStreamReader,
        exporter: AssetExporter,
        sink: ReportSink,
    ):
        self.reader = reader
        self.exporter = exporter
        self.sink = sink
        self.state = PipelineState.IDLE

    async def run(self, criteria: ExportCriteria) -> ExportSummary:
        """
        Export every asset matching ``criteria`` and report the result.

        Raises:
            DirectoryBootstrapError: If the export directory cannot be created
            PipelineStateError: If this pipeline already ran
        """
        if self.state is not PipelineState.IDLE:
            raise PipelineStateError(self.state.value)

        self.state = PipelineState.SCANNING
        aggregator = ExportAggregator()
        summary = ExportSummary()
        mode = "unused " if criteria.only_unused else ""

        stream = await self.reader.open()
        if criteria.asset_source == "":
            self.sink.line(f"Searching for {mode}assets in all asset sources:", style="bold")
        else:
            self.sink.line(
                f'Searching for {mode}assets of asset source "{criteria.asset_source}":',
                style="bold",
            )
        logger.info(
            f"Export started: total={stream.total}, source={criteria.asset_source or '*'}, "
            f"tags={criteria.only_tags or '*'}, only_unused={criteria.only_unused}"
        )

        self.sink.progress_start(stream.total)
        try:
            async for asset in stream.records:
                self.sink.progress_advance(1)
                summary.scanned += 1
                await self._process(asset, criteria, aggregator, summary)
        finally:
            self.sink.progress_finish()

        self.state = PipelineState.FINALIZING
        summary.exported_count = aggregator.exported_count
        summary.exported_total_bytes = aggregator.exported_total_bytes
        summary.rows_by_source = aggregator.rows_by_source
        self._report(aggregator, summary, mode)

        self.state = PipelineState.DONE
        logger.info(
            f"Export finished: scanned={summary.scanned}, exported={summary.exported_count}, "
            f"bytes={summary.exported_total_bytes}, failed={summary.failed}"
        )
        return summary

    async def _process(
        self,
        asset: Asset,
        criteria: ExportCriteria,
        aggregator: ExportAggregator,
        summary: ExportSummary,
    ) -> None:
        if not is_exportable(asset):
            logger.debug(f"Skipping non-exportable record {asset!r}")
            return
        if not should_include(asset, criteria):
            return

        try:
            info = await self.exporter.export(asset)
        except (SourceReadError, WriteError) as e:
            summary.failed += 1
            logger.warning(f"Skipping asset {asset.id}: {e.message}")
            return

        row = ReportRow(
            identifier=asset.id,
            filename=info.filename,
            size=padded_size_string(info.file_size),
        )
        aggregator.record(asset.asset_source_identifier, row, info.file_size)

    def _report(self, aggregator: ExportAggregator, summary: ExportSummary, mode: str) -> None:
        if not aggregator.has_exports:
            self.sink.line()
            self.sink.line(f"No {mode}assets found.")
            return

        for asset_source_identifier, rows in aggregator.rows_by_source.items():
            self.sink.line()
            self.sink.line(
                f"Exported the following {mode}assets from asset source {asset_source_identifier}:",
                style="green",
            )
            self.sink.line()
            self.sink.table(rows, REPORT_HEADERS)

        self.sink.line()
        self.sink.line(
            f"Total size of {aggregator.exported_count} exported assets: "
            f"{bytes_to_size_string(aggregator.exported_total_bytes)}"
        )
        self._report_failures(summary)

    def _report_failures(self, summary: ExportSummary) -> None:
        if summary.failed:
            self.sink.line(f"{summary.failed} assets could not be exported.", style="yellow")
