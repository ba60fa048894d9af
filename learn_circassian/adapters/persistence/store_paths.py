# learn_circassian\adapters\persistence\store_paths.py
import ntpath
import os
import posixpath
import sys
from typing import Mapping, Optional

from learn_circassian.shared.config import settings


def user_data_dir(app_name: str, platform: str, env: Mapping[str, str], home: str) -> str:
    """
    Per-user application-data directory for `app_name`, the same folder a
    packaged desktop build writes its own state to.

    - Windows: %APPDATA%\\<app>
    - macOS:   ~/Library/Application Support/<app>
    - other:   $XDG_CONFIG_HOME/<app> or ~/.config/<app>
    """
    if platform.startswith("win"):
        base = env.get("APPDATA") or ntpath.join(home, "AppData", "Roaming")
        return ntpath.join(base, app_name)

    if platform == "darwin":
        return posixpath.join(home, "Library", "Application Support", app_name)

    base = env.get("XDG_CONFIG_HOME") or posixpath.join(home, ".config")
    return posixpath.join(base, app_name)


def resolve_store_path(
    packaged: bool,
    platform: str,
    env: Mapping[str, str],
    home: str,
    install_root: str,
    app_name: str = settings.APP_NAME,
    filename: str = settings.STORE_FILENAME,
    override: Optional[str] = None,
) -> str:
    """
    Where the store file is expected to live. Pure: no filesystem access.

    Packaged builds use the per-user data directory; development checkouts use
    `<install_root>/resources/`, the folder the `download` CLI command writes to.
    """
    if override:
        return override

    if packaged:
        data_dir = user_data_dir(app_name, platform, env, home)
        join = ntpath.join if platform.startswith("win") else posixpath.join
        return join(data_dir, filename)

    return os.path.join(install_root, "resources", filename)


def default_store_path() -> str:
    """Store path for the running process, from settings and the host environment."""
    return resolve_store_path(
        packaged=settings.PACKAGED,
        platform=sys.platform,
        env=os.environ,
        home=os.path.expanduser("~"),
        install_root=settings.INSTALL_ROOT,
        override=settings.STORE_PATH,
    )
