"""
Pydantic schema definitions for API payloads and the values passed
between services.

Schemas are separated from the storage rows to decouple the API
representation from persistence.  In particular password hashes never
appear in any read schema.
"""
