"""SABnzbd API client module."""

from .client import SabnzbdClient
from .encoder import CallDescriptor, FilePayload, OutputFormat
from .model import (
    CompleteAction,
    ErrorType,
    ErrorWarning,
    File,
    History,
    HistorySlot,
    PostProcessing,
    Priority,
    Queue,
    QueueSlot,
    Results,
    ServerStats,
    SortOptions,
    Stats,
)

__all__ = [
    "SabnzbdClient",
    "CallDescriptor",
    "FilePayload",
    "OutputFormat",
    "CompleteAction",
    "ErrorType",
    "ErrorWarning",
    "File",
    "History",
    "HistorySlot",
    "PostProcessing",
    "Priority",
    "Queue",
    "QueueSlot",
    "Results",
    "ServerStats",
    "SortOptions",
    "Stats",
]
