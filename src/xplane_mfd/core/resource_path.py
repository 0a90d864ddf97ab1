"""Resource path resolution for the repository config directory.

Typical usage:
    from xplane_mfd.core.resource_path import get_config_path

    settings = get_config_path("settings.yaml")
    if settings.exists():
        ...
"""

from pathlib import Path


def get_project_root() -> Path:
    """Get the project root directory.

    Returns:
        Path to the project root when running from source (src/xplane_mfd/core
        is three levels below it). An installed copy has no config directory
        there, so callers must check that files exist.
    """
    return Path(__file__).parent.parent.parent.parent


def get_config_path(config_file: str) -> Path:
    """Get path to a configuration file.

    Args:
        config_file: Config filename or relative path (e.g., "logging.yaml")

    Returns:
        Absolute path to the config file.

    Examples:
        >>> str(get_config_path("settings.yaml"))
        '/Users/user/dev/xplane-mfd/config/settings.yaml'
    """
    return get_project_root() / "config" / config_file
