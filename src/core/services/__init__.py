"""
Business services for Trailpost.

- media_lifecycle.py: keeps entity documents and their media assets consistent
- reconciliation.py: repairs or removes assets left pending by failed requests
- catalog.py: filtering and pagination for the public listings
- wiring.py: service construction for Lambda handlers
"""

__all__: list[str] = []
