"""
Service layer.

The query builder and verse paginator are pure functions; the
repository owns SQLite access, the enrichment client talks to the
metadata provider, and ``SongService`` orchestrates them for the
HTTP handlers.
"""
