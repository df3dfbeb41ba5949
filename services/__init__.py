"""
services/ - Business Logic Layer
=================================
Identifier allocation, renumbering, readiness checks, and the per-entity
services the HTTP handlers call. No SQL lives here.
"""
