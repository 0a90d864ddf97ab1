"""Pytest configuration and fixtures for all tests."""

import pytest

from xplane_mfd.core.logging_system import initialize_logging, shutdown_logging


@pytest.fixture(autouse=True)
def quiet_logging(tmp_path_factory):
    """Initialize logging without console output or platform directories.

    Runs for every test so no handler keeps a stream captured by an
    earlier test.
    """
    log_root = tmp_path_factory.mktemp("logging")
    config = log_root / "test_logging.yaml"
    config.write_text(f"console:\n  enabled: false\nlog_dir: {log_root / 'logs'}\n")
    initialize_logging(config, use_platform_dir=False)

    yield

    shutdown_logging()
