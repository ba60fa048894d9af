# learn_circassian\adapters\desktop\file_browser.py
import os
import subprocess
import sys
from typing import Callable, List, Optional

import structlog

logger = structlog.get_logger()

Launcher = Callable[[List[str]], object]


def _spawn(argv: List[str]) -> subprocess.Popen:
    # Detached: the file manager outlives the request
    return subprocess.Popen(argv, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


def file_manager_command(path: str, platform: str, exists: bool) -> List[str]:
    """
    Command that opens the host file manager at `path`.

    When the file exists it is selected inside its folder; otherwise (the
    store has not been downloaded yet) the parent folder is opened.
    """
    folder = os.path.dirname(path)

    if platform.startswith("win"):
        return ["explorer", f"/select,{path}"] if exists else ["explorer", folder]
    if platform == "darwin":
        return ["open", "-R", path] if exists else ["open", folder]
    # freedesktop has no portable "select file" verb
    return ["xdg-open", folder]


def reveal_in_file_manager(
    path: str,
    platform: Optional[str] = None,
    launcher: Optional[Launcher] = None,
) -> List[str]:
    """Opens the file manager at the store location and returns the command used."""
    platform = platform or sys.platform
    launcher = launcher or _spawn

    argv = file_manager_command(path, platform, exists=os.path.exists(path))
    logger.info("reveal_store_location", path=path, command=argv[0])
    launcher(argv)
    return argv
