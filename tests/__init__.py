"""Test suite for account recovery.

- unit/: Service, domain and adapter logic in isolation (in-memory fakes)
- integration/: Repositories and the full flow against SQLite
- api/: HTTP endpoints through the FastAPI app
"""
