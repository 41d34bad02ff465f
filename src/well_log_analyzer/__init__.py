"""Well-log statistics with optional LLM anomaly detection and interpretation."""

__version__ = "0.1.0"

from .anomalies import detect_outliers, parse_anomaly_response
from .ingest import IngestError, load_records_csv
from .models import Anomaly, LogRecord, RecordStore
from .parameters import InvalidParameterError, Parameter
from .stats import ParameterStats, StatisticsEngine

__all__ = [
    "__version__",
    "Anomaly",
    "IngestError",
    "InvalidParameterError",
    "LogRecord",
    "Parameter",
    "ParameterStats",
    "RecordStore",
    "StatisticsEngine",
    "detect_outliers",
    "load_records_csv",
    "parse_anomaly_response",
]
