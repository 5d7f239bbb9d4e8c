"""Dirchecker data models."""

from dirchecker.models.file_record import FileRecord
from dirchecker.models.rule import ClassificationRule
from dirchecker.models.scan import RunCounters, ScanSettings, ScanSummary

__all__ = [
    "ClassificationRule",
    "FileRecord",
    "RunCounters",
    "ScanSettings",
    "ScanSummary",
]
