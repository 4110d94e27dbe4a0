"""
Path expansion for log file locations.
"""

import os
from pathlib import Path


def expand_path(path: str | Path) -> str:
    """
    Expand `~` and environment variables in a path.

    Unknown variables are left untouched, matching os.path.expandvars.
    Nothing else about the path is normalized.

    Example:
        >>> expand_path("~/logs/$APP_NAME.log")
        '/home/me/logs/myapp.log'
    """
    return os.path.expandvars(os.path.expanduser(os.fspath(path)))
