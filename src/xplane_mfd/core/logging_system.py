"""Logging setup for the calculators and the command-line front end.

Logging is configured from YAML: console level, an optional combined log file
and per-component overrides. Stdout carries the JSON results, so the console
handler writes to stderr and defaults to WARNING.

Platform-specific log locations:
    - macOS: ~/Library/Logs/XPlaneMFD/xplane_mfd.log
    - Linux: ~/.xplane_mfd/logs/xplane_mfd.log
    - Windows: %AppData%/XPlaneMFD/Logs/xplane_mfd.log

When the combined log is enabled, each start rotates it, keeping the last runs.

Typical usage example:
    from xplane_mfd.core.logging_system import get_logger

    logger = get_logger(__name__)
    logger.debug("Clamping distance %.4f nm", distance_nm)
"""

import logging
import logging.handlers
import os
import platform
import sys
import time
from pathlib import Path
from typing import Any

import yaml

_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}
_initialized = False


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get platform-specific log directory.

    Returns:
        Path to the platform-appropriate log directory:
        - macOS: ~/Library/Logs/XPlaneMFD
        - Linux: ~/.xplane_mfd/logs
        - Windows: %AppData%/XPlaneMFD/Logs
    """
    system = platform.system()

    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / "XPlaneMFD"
    elif system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "XPlaneMFD" / "Logs"
    else:
        return Path.home() / ".xplane_mfd" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = "xplane_mfd.log", keep_count: int = 5) -> None:
    """Rotate logs on startup, keeping the last N runs.

    Renames the current log to <name>.1, shifts older logs, and deletes
    logs beyond keep_count.

    Args:
        log_dir: Directory containing log files.
        log_filename: Base name of the log file.
        keep_count: Number of old logs to keep.
    """
    log_file = log_dir / log_filename

    if not log_file.exists():
        return

    oldest_log = log_dir / f"{log_filename}.{keep_count}"
    if oldest_log.exists():
        oldest_log.unlink()

    for i in range(keep_count - 1, 0, -1):
        old_log = log_dir / f"{log_filename}.{i}"
        if old_log.exists():
            old_log.rename(log_dir / f"{log_filename}.{i + 1}")

    log_file.rename(log_dir / f"{log_filename}.1")


def initialize_logging(
    config_path: str | Path | None = None,
    use_platform_dir: bool = True,
    console_level: str | None = None,
) -> None:
    """Initialize the logging system from YAML configuration.

    Call once at startup, before any calculation runs.

    Args:
        config_path: Path to logging configuration YAML file.
            If None, uses default configuration.
        use_platform_dir: If True, use platform-specific log directory.
            If False, use directory from config (for development/testing).
        console_level: Overrides the configured console level (e.g. "DEBUG").

    Raises:
        LoggingError: If the configuration cannot be loaded.

    Examples:
        >>> initialize_logging("config/logging.yaml", console_level="INFO")
    """
    global _logging_config, _initialized

    config = _get_default_config()
    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise LoggingError(f"Logging config file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e

        if not isinstance(loaded, dict):
            raise LoggingError(f"Logging config must be a mapping: {config_path}")
        config.update(loaded)

    if console_level:
        config["console"] = {**config.get("console", {}), "level": console_level.upper()}

    if use_platform_dir:
        config["log_dir"] = str(get_platform_log_dir())

    _logging_config = config
    known_names = list(_loggers_cache)
    _loggers_cache.clear()

    combined = _logging_config.get("combined_log", {})
    if combined.get("enabled", False):
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        rotate_logs(
            log_dir,
            combined.get("filename", "xplane_mfd.log"),
            combined.get("backup_count", 5),
        )

    _configure_root_logger()
    _initialized = True

    # Module-level loggers created before this call pick up the new overrides
    for name in known_names:
        get_logger(name)


def _get_default_config() -> dict[str, Any]:
    """Get default logging configuration.

    Returns:
        Default logging configuration dictionary.
    """
    return {
        "version": 1,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "combined_log": {
            "enabled": False,
            "filename": "xplane_mfd.log",
            "backup_count": 5,
        },
        "console": {
            "enabled": True,
            "level": "WARNING",
        },
        "components": {},
    }


def _configure_root_logger() -> None:
    """Configure the root logger with handlers."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter in handlers

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()

    console_config = _logging_config.get("console", {})
    if console_config.get("enabled", True):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(_level_from_name(console_config.get("level", "WARNING")))
        console_handler.setFormatter(_get_formatter())
        root_logger.addHandler(console_handler)

    combined_config = _logging_config.get("combined_log", {})
    if combined_config.get("enabled", False):
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_file = log_dir / combined_config.get("filename", "xplane_mfd.log")

        # Rotation already happened on startup
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_get_formatter())
        root_logger.addHandler(file_handler)


def _level_from_name(name: str) -> int:
    """Translate a level name from the config into a logging level.

    Raises:
        LoggingError: If the name is not a standard level.
    """
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise LoggingError(f"Unknown log level: {name}")
    return level


class MillisecondFormatter(logging.Formatter):
    """Formatter that shows milliseconds with dot separator."""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a calculator or component.

    Loggers are cached and reused. Each logger can have its own level and a
    dedicated file, configured under the 'components' section of the YAML.

    Args:
        name: Logger name (typically the module name).

    Returns:
        Configured logger instance.

    Examples:
        >>> log = get_logger("xplane_mfd.calculators.vnav")
        >>> log.debug("Clamping groundspeed %.1f kts", groundspeed_kt)
    """
    if not _initialized:
        # Auto-initialize with defaults if not done explicitly
        initialize_logging(use_platform_dir=False)

    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)
    component_config = _logging_config.get("components", {}).get(name, {})

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)

    if component_config.get("enabled", True):
        logger.disabled = False
        if "level" in component_config:
            logger.setLevel(_level_from_name(component_config["level"]))

        if component_config.get("dedicated_file", False):
            log_dir = Path(_logging_config.get("log_dir", "logs"))
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_dir / f"{name}.log",
                maxBytes=component_config.get("max_bytes", 1048576),
                backupCount=component_config.get("backup_count", 5),
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(_get_formatter())
            logger.addHandler(file_handler)
    else:
        logger.disabled = True

    _loggers_cache[name] = logger
    return logger


def shutdown_logging() -> None:
    """Shutdown the logging system gracefully.

    Flushes all handlers and closes log files.
    """
    global _initialized

    logging.shutdown()
    _loggers_cache.clear()
    _initialized = False
