# learn_circassian\adapters\__init__.py
"""
Infrastructure Adapters.

This package contains the concrete implementations of the Ports defined in
`learn_circassian.core.ports`, and the driving adapters around the core:
- `api`: The Primary Adapter (Driving) - loopback FastAPI surface for the UI.
- `persistence`: Secondary Adapter (Driven) - read-only SQLite store.
- `http`: Secondary Adapter (Driven) - streamed store download.
- `desktop`: Host file-manager integration.

Dependencies point INWARD: these modules depend on `learn_circassian.core`,
never the other way round.
"""
