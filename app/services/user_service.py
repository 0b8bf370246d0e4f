"""Service layer for staff account management."""

import logging
from datetime import UTC, datetime

from fastapi_filter.contrib.sqlalchemy import Filter

from app.auth.security import hash_password
from app.auth.token_revocation import TokenRevocationStore
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import OwnerRevocationResponse, UserResponse, UserUpdate
from app.schemas.common import Page, PageParams

logger = logging.getLogger(__name__)


class UserService:
    """Business logic for ``/users``.

    Changing a password or role, deactivating an account and deleting it
    all sign the user out everywhere via ``revoke_all_for_owner``.
    """

    def __init__(self, users: UserRepository, revocations: TokenRevocationStore):
        self._users = users
        self._revocations = revocations

    async def list_users(self, filters: Filter, params: PageParams) -> Page[UserResponse]:
        users, total = await self._users.get_all(filters, params)
        return Page[UserResponse].create(
            [UserResponse.model_validate(u) for u in users], total, params
        )

    async def get_user(self, user_id: str) -> User | None:
        return await self._users.get_by_id(user_id)

    async def update_user(self, user_id: str, data: UserUpdate) -> User | None:
        """Apply a partial update.

        Raises:
            DuplicateRecordError: The new email is already registered.
        """
        user = await self._users.get_by_id(user_id)
        if user is None:
            return None

        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if "email" in changes:
            changes["email"] = changes["email"].lower()
        if "password" in changes:
            changes["password_hash"] = hash_password(changes.pop("password"))

        signs_out = (
            "password_hash" in changes
            or ("role" in changes and changes["role"] != user.role)
            or (changes.get("is_active") is False and user.is_active)
        )

        user = await self._users.apply_changes(user, changes)
        if signs_out:
            await self._revocations.revoke_all_for_owner(user.id)
        return user

    async def delete_user(self, user_id: str) -> bool:
        if not await self._users.delete(user_id):
            return False
        await self._revocations.revoke_all_for_owner(user_id)
        return True

    async def revoke_tokens(self, user_id: str) -> OwnerRevocationResponse | None:
        """Sign a user out of every session they currently hold."""
        if await self._users.get_by_id(user_id) is None:
            return None
        revoked_before = datetime.now(UTC)
        superseded = await self._revocations.revoke_all_for_owner(user_id)
        return OwnerRevocationResponse(
            owner_id=user_id, revoked_before=revoked_before, superseded=superseded
        )
