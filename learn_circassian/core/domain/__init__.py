# learn_circassian\core\domain\__init__.py
"""
Domain Entities and Value Objects.

This package defines the core data structures used throughout the application
(Dictionary, Word Record, Entry, search pages) together with the pure text
helpers applied to them. It is devoid of any infrastructure logic.
"""
