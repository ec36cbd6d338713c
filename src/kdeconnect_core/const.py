import os

from kdeconnect_core import __version__

__all__ = [
    "KDECONNECT_DEBUG",
    "KDECONNECT_LOG_FORMAT",
    "KDECONNECT_LOG_HUMAN_OUTPUT",
    "KDECONNECT_LOG_JSON_FILE",
    "KDECONNECT_MAX_PACKET_SIZE",
    "KDECONNECT_METRICS_PORT",
    "KDECONNECT_VERSION",
    "YES_ANSWER",
]

YES_ANSWER = ("true", "1", "yes", "y", "t", 1, "on", "o")
KDECONNECT_VERSION: str = __version__

KDECONNECT_DEBUG: bool = os.environ.get("KDECONNECT_DEBUG", "0").casefold() in YES_ANSWER

_max_packet_size = os.environ.get("KDECONNECT_MAX_PACKET_SIZE", "1048576")
try:
    _max_packet_size_value: int = int(_max_packet_size) if _max_packet_size else 1048576
except ValueError:
    _max_packet_size_value = 1048576
if _max_packet_size_value <= 0:
    _max_packet_size_value = 1048576
# Longest line the stream framer buffers before discarding it
KDECONNECT_MAX_PACKET_SIZE: int = _max_packet_size_value

_metrics_port = os.environ.get("KDECONNECT_METRICS_PORT", "9410")
KDECONNECT_METRICS_PORT: int = int(_metrics_port) if _metrics_port and _metrics_port.isdigit() else 9410

# Logging Configuration
KDECONNECT_LOG_FORMAT: str = os.environ.get("KDECONNECT_LOG_FORMAT", "human")  # "json", "human", or "both"
_json_file = os.environ.get("KDECONNECT_LOG_JSON_FILE")
KDECONNECT_LOG_JSON_FILE: str | None = _json_file if _json_file else None
KDECONNECT_LOG_HUMAN_OUTPUT: str = os.environ.get("KDECONNECT_LOG_HUMAN_OUTPUT", "stderr")  # "stdout", "stderr", or file path
