"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for one record table.
Repositories receive raw rows from the StorageGateway and return domain model objects.
"""
