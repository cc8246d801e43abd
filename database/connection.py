"""
Database connection and session management
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

# Create declarative base
Base = declarative_base()


def create_engine(database_url: str, echo: bool = False):
    """Create the async engine used by the SQL document store"""
    return create_async_engine(database_url, echo=echo, future=True)


def create_session_factory(engine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
