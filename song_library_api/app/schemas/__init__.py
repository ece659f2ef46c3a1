"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the SQL rows in ``services`` so the wire
representation can evolve independently of persistence.
"""
