"""Core campyviz aggregation primitives.

This package turns a spreadsheet of Campylobacter virulence-gene annotations
into the aggregate JSON payload consumed by the visualization site.
"""

from .adapters import DataAdapter, RowsAdapter, SpreadsheetAdapter
from .aggregation import AggregationEngine
from .config import AggregationConfig, ColumnRule
from .errors import AggregationFailure, CampyvizError, EmptyInputError, MissingInputError
from .models import AggregationResult, GeneRecord
from .pipeline import VisualizationPipeline, VisualizationRunReport
from .profiles import AggregationProfile, AggregationProfileLoader
from .publishers import JsonPayloadPublisher, Publisher
from .quality import PayloadValidator

__all__ = [
    "AggregationConfig",
    "AggregationEngine",
    "AggregationFailure",
    "AggregationProfile",
    "AggregationProfileLoader",
    "AggregationResult",
    "CampyvizError",
    "ColumnRule",
    "DataAdapter",
    "EmptyInputError",
    "GeneRecord",
    "JsonPayloadPublisher",
    "MissingInputError",
    "PayloadValidator",
    "Publisher",
    "RowsAdapter",
    "SpreadsheetAdapter",
    "VisualizationPipeline",
    "VisualizationRunReport",
]
