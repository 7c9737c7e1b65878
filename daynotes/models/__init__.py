# Models package init
"""
Importing this package registers every table with `Base.metadata`
(required by Alembic autogenerate and `Database.create_schema()`).
"""

from daynotes.models.earning import DailyEarning
from daynotes.models.note import Note
from daynotes.models.user import User

__all__ = ["DailyEarning", "Note", "User"]
