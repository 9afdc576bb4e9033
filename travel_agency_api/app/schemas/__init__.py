"""
Pydantic schema definitions for API payloads.

Field names follow the column names of the underlying tables
(``IdClient``, ``RegisteredAt``...) on the wire through aliases, while
Python code works with snake_case attributes.
"""
