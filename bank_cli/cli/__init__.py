# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""bank CLI package."""

from bank_cli.cli.main import app

__all__ = ["app"]
