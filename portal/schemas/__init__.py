"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: Internal data structures used by the services
- Schemas: API contract (what client sends/receives)
"""
