"""
Per-domain repository modules for database access.

Each module owns the queries for one table; API and service layers call
these instead of building queries inline.
"""
