"""
BITS Research Connect
Research-opportunity marketplace for BITS Pilani, Goa campus.

Architecture:
- PostgreSQL: users, profiles, research positions, applications
- SQLite in memory: demo dataset when PostgreSQL is unreachable
- FastAPI: JSON API consumed by the web client
"""

__version__ = "1.0.0"
