# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Main entry point for `python -m bank_cli`."""

from bank_cli.cli.main import app


def main() -> None:
    """Run the bank CLI."""
    app(prog_name="bank")


if __name__ == "__main__":
    main()
