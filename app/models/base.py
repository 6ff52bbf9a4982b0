"""Shared metadata for all tables."""

from sqlalchemy import MetaData

# Metadata for all tables
metadata = MetaData()
