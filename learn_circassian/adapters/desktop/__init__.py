# learn_circassian\adapters\desktop\__init__.py
"""
Desktop Integration Adapters.

- reveal_in_file_manager: shows the store file (or its folder) in the host file manager.
"""

from .file_browser import reveal_in_file_manager

__all__ = ["reveal_in_file_manager"]
