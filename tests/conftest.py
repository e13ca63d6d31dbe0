# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0

"""Global test fixtures"""

import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

from bank_cli.core.types import TimePair
from bank_cli.utils.config import BankConfigSingleton
from bank_cli.utils.logger import configure_logging

# 2024-06-01T12:00:00Z
FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc).timestamp()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Never pick up a real ~/.bank/bank.conf; reset config and logging around each test."""
    missing = tmp_path_factory.mktemp("bank_conf") / "missing.conf"
    monkeypatch.setenv("BANK_CONFIG_FILE", str(missing))
    BankConfigSingleton.reset_instance()
    yield
    BankConfigSingleton.reset_instance()
    configure_logging()


@pytest.fixture
def now() -> float:
    return FIXED_NOW


@pytest.fixture
def now_times(now) -> TimePair:
    return TimePair(access_time=now, modification_time=now, now=now)


@pytest.fixture
def existing_file(tmp_path: Path) -> Path:
    """A pre-existing file with known timestamps (atime=1000, mtime=2000)."""
    path = tmp_path / "existing.txt"
    path.write_text("content")
    os.utime(path, (1000, 2000))
    return path
