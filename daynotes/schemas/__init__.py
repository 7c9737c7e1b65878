# Schemas package init
"""
API contracts: pydantic request and response models, kept separate from the
SQLAlchemy models so the JSON field names (`date`, `text`, `userId`) can
differ from the column names.
"""
