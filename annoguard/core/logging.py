"""
Channel-Aware Structured Logging for AnnoGuard.

Provides semantic logging channels with level-based filtering:
- CREATE: create requests checked by behaviors
- RENDER: render-phase comments
- VALIDATE: validation passes and reports
- CONFIG: layer configuration loading
- SYSTEM: errors, warnings, status

Log Levels:
- SILENT (0): No logging
- INFO (1): Key milestones only
- VERBOSE (2): Detailed operations
- DEBUG (3): Everything

Configuration via environment:
- ANNOGUARD_LOG_LEVEL: Global level (silent/info/verbose/debug)
- ANNOGUARD_LOG_FORMAT: Output format (console/json)
- ANNOGUARD_LOG_CHANNELS: Comma-separated channel filter (all if not set)
"""

import logging
import os
import sys
from contextvars import ContextVar
from enum import Enum, IntEnum
from typing import Optional, Union

import structlog


# =============================================================================
# Enums
# =============================================================================

class LogLevel(IntEnum):
    """Log verbosity levels."""
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Parse log level from string."""
        mapping = {
            "silent": cls.SILENT,
            "info": cls.INFO,
            "verbose": cls.VERBOSE,
            "debug": cls.DEBUG,
            # stdlib compatibility
            "warning": cls.INFO,
            "error": cls.INFO,
        }
        return mapping.get(s.lower(), cls.INFO)


class LogChannel(str, Enum):
    """Semantic log channels."""
    CREATE = "CREATE"         # Create requests
    RENDER = "RENDER"         # Render-phase comments
    VALIDATE = "VALIDATE"     # Validation passes
    CONFIG = "CONFIG"         # Layer configuration
    SYSTEM = "SYSTEM"         # Errors, warnings, status

    @classmethod
    def all(cls) -> list["LogChannel"]:
        """Return all channels."""
        return list(cls)

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        """Parse channel from string."""
        try:
            return cls(s.upper())
        except ValueError:
            return None


# =============================================================================
# Configuration
# =============================================================================

# Context variable for request-scoped logging
_request_context: ContextVar[dict] = ContextVar("annoguard_log_context", default={})

# Global configuration
_config = {
    "level": LogLevel.INFO,
    "format": "console",
    "channels": set(LogChannel.all()),
    "configured": False,
}


def _parse_channels(channels: list[Union[LogChannel, str]]) -> list[LogChannel]:
    parsed = []
    for ch in channels:
        if isinstance(ch, LogChannel):
            parsed.append(ch)
            continue
        channel = LogChannel.from_string(ch.strip())
        if channel:
            parsed.append(channel)
    return parsed


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: str = None,
    channels: list[Union[LogChannel, str]] = None,
    force: bool = False,
) -> None:
    """
    Configure the logging system.

    Args:
        level: Log level (LogLevel enum or string)
        format: Output format ("console" or "json")
        channels: List of channels to enable (all if None)
        force: Force reconfiguration if already configured
    """
    if _config["configured"] and not force:
        return

    if level is None:
        level = LogLevel.from_string(os.environ.get("ANNOGUARD_LOG_LEVEL", "info"))
    elif isinstance(level, str):
        level = LogLevel.from_string(level)

    if format is None:
        format = os.environ.get("ANNOGUARD_LOG_FORMAT", "console")

    if channels is None:
        channels_str = os.environ.get("ANNOGUARD_LOG_CHANNELS", "")
        channels = _parse_channels(channels_str.split(",")) if channels_str else []
        channels = channels or LogChannel.all()
    else:
        channels = _parse_channels(channels)

    _config["level"] = level
    _config["format"] = format
    _config["channels"] = set(channels)

    stdlib_level = {
        LogLevel.SILENT: logging.CRITICAL + 10,  # Above critical = nothing
        LogLevel.INFO: logging.INFO,
        LogLevel.VERBOSE: logging.DEBUG,
        LogLevel.DEBUG: logging.DEBUG,
    }.get(level, logging.INFO)

    # Logs go to stderr so CLI output on stdout stays machine-readable
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=stdlib_level,
        force=True,
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _config["configured"] = True


# =============================================================================
# Channel Logger
# =============================================================================

class ChannelLogger:
    """
    A logger bound to a specific channel.

    Provides level-aware logging methods:
    - info(): Key milestones (level >= INFO)
    - verbose(): Detailed operations (level >= VERBOSE)
    - debug(): Everything (level >= DEBUG)
    - error(): Always logged (unless SILENT)
    - warning(): Always logged (unless SILENT)
    """

    def __init__(
        self,
        channel: LogChannel,
        name: str = None,
        component: str = None,
    ):
        self.channel = channel
        self.name = name or f"annoguard.{channel.value.lower()}"
        self.component = component
        self._logger = structlog.get_logger(self.name)

    def _should_log(self, msg_level: LogLevel) -> bool:
        if self.channel not in _config["channels"]:
            return False
        return _config["level"] >= msg_level

    def _make_event(self, **kwargs) -> dict:
        data = {
            "channel": self.channel.value,
            **kwargs,
        }
        if self.component:
            data["component"] = self.component

        ctx = _request_context.get()
        if ctx:
            data.update(ctx)

        return data

    def info(self, event: str, **kwargs) -> None:
        """Log at INFO level (key milestones)."""
        if not self._should_log(LogLevel.INFO):
            return
        self._logger.info(event, **self._make_event(**kwargs))

    def verbose(self, event: str, **kwargs) -> None:
        """Log at VERBOSE level (detailed operations)."""
        if not self._should_log(LogLevel.VERBOSE):
            return
        self._logger.debug(event, **self._make_event(verbosity="verbose", **kwargs))

    def debug(self, event: str, **kwargs) -> None:
        """Log at DEBUG level (everything)."""
        if not self._should_log(LogLevel.DEBUG):
            return
        self._logger.debug(event, **self._make_event(verbosity="debug", **kwargs))

    def error(self, event: str, **kwargs) -> None:
        """Log an error (always logged unless SILENT)."""
        if _config["level"] == LogLevel.SILENT:
            return
        self._logger.error(event, **self._make_event(**kwargs))

    def warning(self, event: str, **kwargs) -> None:
        """Log a warning (always logged unless SILENT)."""
        if _config["level"] == LogLevel.SILENT:
            return
        self._logger.warning(event, **self._make_event(**kwargs))


# =============================================================================
# Logger Factory Functions
# =============================================================================

def get_logger(channel: Union[LogChannel, str] = LogChannel.SYSTEM) -> ChannelLogger:
    """
    Get a channel-specific logger.

    Args:
        channel: The log channel (default: SYSTEM)

    Returns:
        A ChannelLogger instance
    """
    configure_logging()

    if isinstance(channel, str):
        channel = LogChannel.from_string(channel) or LogChannel.SYSTEM

    return ChannelLogger(channel=channel)


def get_component_logger(component: str, channel: LogChannel = LogChannel.SYSTEM) -> ChannelLogger:
    """
    Get a logger for a named component (a behavior, the registry, the runner).

    Args:
        component: Component name included in every event
        channel: The log channel

    Returns:
        A ChannelLogger bound to the component
    """
    configure_logging()

    return ChannelLogger(
        channel=channel,
        name=f"annoguard.{component}",
        component=component,
    )


# =============================================================================
# Request Context Management
# =============================================================================

def bind_request_context(**kwargs) -> None:
    """Bind context that will be included in all log messages."""
    ctx = _request_context.get().copy()
    ctx.update(kwargs)
    _request_context.set(ctx)


def clear_request_context() -> None:
    """Clear the request context."""
    _request_context.set({})


def get_current_config() -> dict:
    """Get the current logging configuration (for testing/debugging)."""
    return {
        "level": _config["level"].name,
        "format": _config["format"],
        "channels": sorted(ch.value for ch in _config["channels"]),
    }
