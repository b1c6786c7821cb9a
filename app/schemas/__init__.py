"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: table definitions used to create the database schema
- Schemas: API contract (what client sends/receives)

All schemas live in app.schemas.schemas.
"""
