"""Application layer: ports and workflow services.

Imports from the domain layer only. Infrastructure adapters implement
the ports; the api layer calls the services.
"""
