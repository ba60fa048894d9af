# tests\__init__.py
"""
Test Suite for the Learn Circassian dictionary backend.

Organization:
- `core`: Domain helpers and Use Cases with mocked ports.
- `adapters`: SQLite store, HTTP fetcher and API routes against real
  temporary files and mock HTTP transports.
"""
