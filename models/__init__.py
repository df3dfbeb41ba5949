"""
models/ - Domain Models
========================
Plain dataclasses for the two record types plus the EntityType descriptors
that tell the generic repository and services which table and columns to use.
"""
