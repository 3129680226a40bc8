"""
Asynchronous client for the SABnzbd HTTP API.

Usage:
    from sabnzbd_api import SabnzbdClient, Priority

    client = SabnzbdClient("http://localhost:8080", "<api key>")

    results = await client.add_url(
        "https://indexer.example/get/123.nzb",
        cat="tv",
        priority=Priority.HIGH,
    )
    queue = await client.queue(nzo_ids=results.nzo_ids)
"""

from .api import (
    CompleteAction,
    ErrorType,
    ErrorWarning,
    File,
    History,
    HistorySlot,
    OutputFormat,
    PostProcessing,
    Priority,
    Queue,
    QueueSlot,
    Results,
    SabnzbdClient,
    ServerStats,
    SortOptions,
    Stats,
)
from .config import ConfigManager, SabnzbdConfig, load_config
from .exceptions import (
    ConfigurationError,
    DecodeError,
    ProtocolError,
    SabnzbdError,
    TransportError,
)
from .logger import configure_logger

__version__ = "1.0.0"

__all__ = [
    # Client
    "SabnzbdClient",
    "OutputFormat",
    # Records
    "Queue",
    "QueueSlot",
    "History",
    "HistorySlot",
    "File",
    "ErrorWarning",
    "Results",
    "Stats",
    "ServerStats",
    # Enums
    "CompleteAction",
    "ErrorType",
    "PostProcessing",
    "Priority",
    "SortOptions",
    # Errors
    "SabnzbdError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    "ProtocolError",
    # Configuration
    "ConfigManager",
    "SabnzbdConfig",
    "load_config",
    "configure_logger",
]
