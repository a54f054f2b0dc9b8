"""Unit tests configuration file."""

import io

import pytest


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def stream():
    """Build a seekable byte stream from byte chunks."""

    def build(*chunks: bytes) -> io.BytesIO:
        return io.BytesIO(b"".join(chunks))

    return build
