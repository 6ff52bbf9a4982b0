"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.redis_client import CacheManager, get_redis_client
from app.core.repository import Repository
from app.database import get_db


async def get_repository(db: Annotated[AsyncSession, Depends(get_db)]) -> Repository:
    """Repository bound to the request's database session."""
    return Repository(db)


def get_cache_manager() -> CacheManager:
    """Cache manager over the shared Redis client."""
    return CacheManager(redis_client=get_redis_client())


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
RepositoryDep = Annotated[Repository, Depends(get_repository)]
CacheDep = Annotated[CacheManager, Depends(get_cache_manager)]
