"""Dry-run analysis of historical skip-hire booking exports.

The engine decodes a spreadsheet export, maps its headers onto the booking
schema, resolves skip sizes against the tenant catalog, estimates unique
customers and validates every row. It never writes to the record store.
"""

__version__ = "0.3.0"
