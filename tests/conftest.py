# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for user database merge tests."""

import os
from pathlib import Path
from typing import Callable, Generator

import pytest

# Keep loguru quiet unless a test attaches its own sink
os.environ.setdefault("DISABLE_LOGGING", "1")

from loguru import logger  # noqa: E402

logger.remove()


@pytest.fixture
def log_messages() -> Generator[list, None, None]:
    """Capture loguru messages at WARNING and above."""
    messages: list[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8", newline="")
        return path

    return _write


@pytest.fixture
def main_content() -> str:
    """Sample main file with a header block and tick line."""
    return (
        "# userdb snapshot\n"
        "#@/tick 12345 extra\n"
        "#@/db_type userdb\n"
        "ce shi\t测试\tc=10 d=0.1111 t=11111\n"
        "ni hao\t你好\tc=5 d=0.2 t=11111\n"
    )


@pytest.fixture
def input_content() -> str:
    """Sample additional input file overlapping the main file."""
    return (
        "# other snapshot\n"
        "#@/tick 99999\n"
        "ni hao\t你好\tc=7 d=0.9 t=22222\n"
        "ce shi\t测试\tc=3 d=0.3 t=22222\n"
        "a\tb\tc=1 d=1 t=22222\n"
    )
