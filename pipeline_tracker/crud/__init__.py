"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern. Tenant-owned lookups take the caller's
organization_id and filter on it.
"""

from pipeline_tracker.crud import candidate, role, stage_event, user

__all__ = ["candidate", "role", "stage_event", "user"]
