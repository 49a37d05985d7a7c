"""
Practice management REST API.

Tenant-scoped CRUD over patients, health professionals, appointments,
medical records and billing, with a dynamic filter/query engine shared
by every entity.
"""
