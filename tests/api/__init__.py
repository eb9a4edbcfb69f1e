"""API tests package.

Request/response tests for the password reset endpoints using TestClient.
Services are replaced through FastAPI dependency overrides.
"""
