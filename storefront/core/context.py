"""
storefront/core/context.py

Purpose: Explicit application and request contexts

- AppContext: settings + database handle, built once at startup and
  passed to every service call
- AuthContext: identity resolved from the session cookie, passed
  explicitly into cart/favorites/profile operations
"""

from dataclasses import dataclass
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorCollection

from storefront.core.config import Settings
from storefront.utils.constants import USERS_COLLECTION, SESSIONS_COLLECTION


@dataclass
class AppContext:
    settings: Settings
    database: AsyncIOMotorDatabase
    client: Optional[AsyncIOMotorClient] = None

    @property
    def users(self) -> AsyncIOMotorCollection:
        return self.database[USERS_COLLECTION]

    @property
    def sessions(self) -> AsyncIOMotorCollection:
        return self.database[SESSIONS_COLLECTION]


@dataclass(frozen=True)
class AuthContext:
    user_id: str
    session_id: str
