"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the SQL in the store so the HTTP
representation can change independently of persistence.
"""
