# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
from .bank_config import (
    BankConfig,
    BankConfigSingleton,
    get_bank_config,
)
from .config_loader import (
    BANK_CONFIG_ENV,
    DEFAULT_BANK_CONF,
    DEFAULT_CONFIG_DIR,
    load_json_config,
    resolve_config_path,
)

__all__ = [
    "BANK_CONFIG_ENV",
    "BankConfig",
    "BankConfigSingleton",
    "DEFAULT_BANK_CONF",
    "DEFAULT_CONFIG_DIR",
    "get_bank_config",
    "load_json_config",
    "resolve_config_path",
]
