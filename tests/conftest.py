"""Pytest configuration and shared fixtures for typedbencode tests."""

from __future__ import annotations

import logging

import pytest

from typedbencode import config as config_module
from typedbencode.models import DecoderConfig


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("unit", "marks tests as unit tests"),
        ("core", "marks tests as core functionality tests"),
        ("config", "marks tests as configuration tests"),
        ("integration", "marks tests as integration tests"),
        ("property", "marks tests as property-based tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch, tmp_path):
    """Keep the global configuration away from the developer's files and env."""
    for env_name in config_module.ENV_MAPPINGS:
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    logger = logging.getLogger("typedbencode")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def decoder_config() -> DecoderConfig:
    """Default decoder configuration."""
    return DecoderConfig()


@pytest.fixture
def single_file_torrent() -> bytes:
    """Bencoded single-file metainfo, keys in canonical order."""
    pieces = b"\x00" * 20 + b"\xff" * 20
    return (
        b"d"
        b"8:announce40:http://tracker.example.com:6969/announce"
        b"7:comment12:Test torrent"
        b"13:creation datei1700000000e"
        b"4:info"
        b"d"
        b"6:lengthi12345e"
        b"4:name13:test_file.txt"
        b"12:piece lengthi16384e"
        b"6:pieces40:" + pieces + b"e"
        b"e"
    )


@pytest.fixture
def multi_file_torrent() -> bytes:
    """Bencoded multi-file metainfo."""
    return (
        b"d"
        b"8:announce31:http://tracker.example/announce"
        b"4:info"
        b"d"
        b"5:files"
        b"l"
        b"d6:lengthi1000e4:pathl9:file1.txtee"
        b"d6:lengthi2000e4:pathl6:subdir9:file2.txtee"
        b"e"
        b"4:name13:TestDirectory"
        b"12:piece lengthi32768e"
        b"6:pieces20:" + b"x" * 20 + b"e"
        b"e"
    )
