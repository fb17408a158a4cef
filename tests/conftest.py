"""
tests/conftest.py

Shared fixtures: parameter files on disk, a recording transport and a
small logo image.
"""
from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Tuple

import pytest
from PIL import Image

from mailcomposer.core.errors import TransportError
from mailcomposer.models import AssembledMessage, EmailConfiguration

BASE_PARAMS = {
    "smtp_server": "mail.x.com",
    "port": "587",
    "user": "a@x.com",
    "password": "p",
    "to": "b@y.com",
    "subject": "Hi",
}


class RecordingTransport:
    """Transport double that keeps every message it is asked to send."""

    def __init__(self, error: Exception | None = None):
        self.sent: List[Tuple[AssembledMessage, EmailConfiguration]] = []
        self._error = error

    def send(self, message: AssembledMessage, config: EmailConfiguration) -> None:
        if self._error is not None:
            raise self._error
        self.sent.append((message, config))


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def failing_transport() -> RecordingTransport:
    return RecordingTransport(error=TransportError("Failed to deliver email: 535 auth failed"))


@pytest.fixture
def write_params(tmp_path: Path) -> Callable[..., Path]:
    """Write a parameter file built from BASE_PARAMS plus overrides."""

    def _write(name: str = "email.prm", encoding: str = "utf-8", **overrides: str) -> Path:
        params = {**BASE_PARAMS, **overrides}
        lines = [f"{key}={value}" for key, value in params.items() if value is not None]
        path = tmp_path / name
        path.write_bytes(("\n".join(lines) + "\n").encode(encoding))
        return path

    return _write


@pytest.fixture
def logo_file(tmp_path: Path) -> Path:
    path = tmp_path / "logo.png"
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(path, format="PNG")
    return path


@pytest.fixture
def base_config() -> EmailConfiguration:
    return EmailConfiguration(
        smtp_server="mail.x.com",
        port=587,
        user="a@x.com",
        password="p",
        to=("b@y.com",),
        subject="Hi",
        body="Hello",
    )
