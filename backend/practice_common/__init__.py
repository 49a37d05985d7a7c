"""
Shared infrastructure for the practice management backend:
configuration, logging, database wiring, errors and request context.
"""
