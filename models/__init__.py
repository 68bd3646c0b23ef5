"""
models/ - Data Records
======================
Plain dataclasses shared across layers: connection settings and query results.
"""
