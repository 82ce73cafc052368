"""Data access layer - Database models and connections."""

from .db_models import Base, Property, Inspection, InspectionPhoto
from .database import (
    DatabaseManager,
    get_db_manager,
    session_scope,
    init_database,
    get_db
)

__all__ = [
    # Models
    'Base',
    'Property',
    'Inspection',
    'InspectionPhoto',

    # Database
    'DatabaseManager',
    'get_db_manager',
    'session_scope',
    'init_database',
    'get_db'
]
