#!/usr/bin/env python3
"""
Configuration Test Script

Checks environment parsing and command-line overrides.

Usage:
    python scripts/test_config.py
"""

import logging
import os
import socket
import sys

# Add project root to path
sys.path.insert(0, ".")

from botregistry.__main__ import main as run_server, parse_args
from botregistry.config import Settings, settings_from_env
from botregistry.storage import StorageBackend, StorageSettings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

ENV_KEYS = (
    "BOTREG_DEBUG",
    "BOTREG_HOST",
    "BOTREG_PORT",
    "BOTREG_ALIVE_TIMEOUT",
    "BOTREG_REFRESH_ALIVE",
    "BOTREG_AUTOSAVE_INTERVAL",
    "BOTREG_STORAGE_BACKEND",
    "BOTREG_FILE",
)


def _with_env(values: dict[str, str], check) -> None:
    saved = {k: os.environ.get(k) for k in ENV_KEYS}
    try:
        for key in ENV_KEYS:
            os.environ.pop(key, None)
        os.environ.update(values)
        check()
    finally:
        for key, value in saved.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


def test_env_defaults():
    """Test defaults with no BOTREG_* variables set."""
    logger.info("=" * 60)
    logger.info("Test: Environment Defaults")
    logger.info("=" * 60)

    def check():
        settings = settings_from_env()
        assert settings.debug is False
        assert settings.port == 7978
        assert settings.alive_timeout_seconds == 10.0
        assert settings.refresh_alive is False
        assert settings.autosave_interval_seconds == 0.0
        assert settings.storage.file_path == ".robot_statuses"

    _with_env({}, check)
    logger.info("✓ Environment defaults passed")


def test_env_values():
    """Test reading every variable."""
    logger.info("=" * 60)
    logger.info("Test: Environment Values")
    logger.info("=" * 60)

    def check():
        settings = settings_from_env()
        assert settings.debug is True
        assert settings.host == "127.0.0.1"
        assert settings.port == 8080
        assert settings.alive_timeout_seconds == 2.5
        assert settings.refresh_alive is True
        assert settings.autosave_interval_seconds == 20.0
        assert settings.storage.backend == StorageBackend.MEMORY

    _with_env({
        "BOTREG_DEBUG": "TRUE",
        "BOTREG_HOST": "127.0.0.1",
        "BOTREG_PORT": "8080",
        "BOTREG_ALIVE_TIMEOUT": "2.5",
        "BOTREG_REFRESH_ALIVE": "true",
        "BOTREG_AUTOSAVE_INTERVAL": "20",
        "BOTREG_STORAGE_BACKEND": "memory",
    }, check)

    def check_bad_port():
        try:
            settings_from_env()
            raise AssertionError("Expected ValueError for bad port")
        except ValueError:
            pass

    _with_env({"BOTREG_PORT": "seventy"}, check_bad_port)
    logger.info("✓ Environment values passed")


def test_flags_override():
    """Test that command-line flags win over settings."""
    logger.info("=" * 60)
    logger.info("Test: Flag Overrides")
    logger.info("=" * 60)

    settings = parse_args([], defaults=Settings())
    assert settings.port == 7978
    assert settings.debug is False

    defaults = Settings(storage=StorageSettings(backend=StorageBackend.MEMORY))
    settings = parse_args(
        ["--debug", "--port", "9000", "--file", "/tmp/bots.json"],
        defaults=defaults,
    )
    assert settings.debug is True
    assert settings.port == 9000
    assert settings.storage.file_path == "/tmp/bots.json"
    assert settings.storage.backend == StorageBackend.FILE

    # Naming the default file still selects the file backend
    defaults = Settings(storage=StorageSettings(backend=StorageBackend.MEMORY))
    settings = parse_args(["--file", ".robot_statuses"], defaults=defaults)
    assert settings.storage.backend == StorageBackend.FILE
    assert settings.storage.file_path == ".robot_statuses"

    settings = parse_args([], defaults=defaults)
    assert settings.storage.backend == StorageBackend.MEMORY

    logger.info("✓ Flag overrides passed")


def test_bind_failure_exits_nonzero():
    """Test exit status 1 when the port is taken."""
    logger.info("=" * 60)
    logger.info("Test: Bind Failure")
    logger.info("=" * 60)

    taken = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        taken.bind(("127.0.0.1", 0))
        taken.listen(1)
        port = taken.getsockname()[1]

        def check():
            assert run_server(["--host", "127.0.0.1", "--port", str(port), "--debug"]) == 1
            assert logging.getLogger().level == logging.DEBUG

        _with_env({"BOTREG_STORAGE_BACKEND": "memory"}, check)
    finally:
        taken.close()
        logging.getLogger().setLevel(logging.INFO)

    logger.info("✓ Bind failure passed")


def main():
    """Run all tests."""
    logger.info("Configuration Test Suite")
    logger.info("=" * 60)

    try:
        test_env_defaults()
        test_env_values()
        test_flags_override()
        test_bind_failure_exits_nonzero()

        logger.info("")
        logger.info("=" * 60)
        logger.info("All tests passed! ✓")
        logger.info("=" * 60)

    except AssertionError as e:
        logger.error(f"Test failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
