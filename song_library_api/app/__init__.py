"""
FastAPI application package for the song library.

Submodules are grouped by concern: ``core`` holds configuration,
logging, errors and database helpers; ``schemas`` the Pydantic
payloads; ``services`` the catalogue logic; and ``api`` the HTTP
routes.
"""
