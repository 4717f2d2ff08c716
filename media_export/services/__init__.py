"""
Export services.
Each stage of the export pipeline lives in its own module.
"""

from media_export.services.aggregator import ExportAggregator, ReportRow
from media_export.services.asset_stream import AssetStream, AssetStreamReader
from media_export.services.exporter import META_SUFFIX, AssetExporter, ExportedFileInfo
from media_export.services.filters import ExportCriteria, parse_tag_filter, should_include
from media_export.services.pipeline import ExportPipeline, ExportSummary, PipelineState
from media_export.services.report import ReportSink, RichReportSink

__all__ = [
    "AssetExporter",
    "AssetStream",
    "AssetStreamReader",
    "ExportAggregator",
    "ExportCriteria",
    "ExportPipeline",
    "ExportSummary",
    "ExportedFileInfo",
    "META_SUFFIX",
    "PipelineState",
    "ReportRow",
    "ReportSink",
    "RichReportSink",
    "parse_tag_filter",
    "should_include",
]
