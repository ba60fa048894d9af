# learn_circassian\core\__init__.py
"""
Core Domain.

Entities, ports and use cases of the dictionary query layer. Nothing in
this package imports from `learn_circassian.adapters`.
"""
