"""
db/ - Database Layer
====================
Owns the PostgreSQL connection pool (StorageGateway) and the self-healing
schema bootstrap (BootstrapManager).
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
