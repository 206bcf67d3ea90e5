"""Locate the ``postmeta.toml`` that applies to a directory.

The nearest file found walking up from the working directory wins, the way
git finds ``.git/``. ``POSTMETA_CONFIG`` (or ``-c/--config``, handled in
:mod:`postmeta.config.settings`) names a file explicitly.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "postmeta.toml"
CONFIG_ENV_VAR = "POSTMETA_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None.

    When ``POSTMETA_CONFIG`` is set it is the only candidate; if it names a
    missing file no config is used rather than falling back to the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
