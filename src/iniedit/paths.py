from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir as _uc, user_data_dir as _ud

APP_NAME = "iniedit"

# ---------------------------------------------------------------------------
# User directories
# ---------------------------------------------------------------------------

def user_config_dir(app_name: str = APP_NAME) -> Path:
    env = os.getenv("INIEDIT_CONFIG_DIR")
    if env:
        return Path(env).expanduser().resolve()
    return Path(_uc(appname=app_name)).resolve()

def user_data_dir(app_name: str = APP_NAME) -> Path:
    env = os.getenv("INIEDIT_DATA_DIR")
    if env:
        return Path(env).expanduser().resolve()
    return Path(_ud(appname=app_name)).resolve()

def settings_file() -> Path:
    return user_config_dir() / "settings.ini"
