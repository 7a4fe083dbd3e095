"""User Directory — people and roles, with the role name resolved on every read.

Invariants:
    - Reads return users with `role` filled from the roles collection (None if dangling)
    - list_by_role returns active users only; lookups are by exact role name
    - Emails are unique; create/update reject a taken email with InvalidInputError
    - create/update reject an unknown role_id with InvalidInputError
    - update of a missing user raises ResourceNotFoundError; deactivate/delete report a bool
"""

import logging
from dataclasses import replace

from app.core.domain_types import RoleId, UserId
from app.core.entities import Role, User
from app.core.errors import InvalidInputError, ResourceNotFoundError
from app.core.repository_protocols import Clock
from app.services.stores import TrainingStores

logger = logging.getLogger(__name__)


def _with_role(user: User, roles_by_id: dict[RoleId, Role]) -> User:
    role = roles_by_id.get(user.role_id)
    return replace(user, role=role.name if role else None)


class UserDirectory:
    def __init__(self, stores: TrainingStores, clock: Clock):
        self.stores = stores
        self.clock = clock

    async def _roles_by_id(self) -> dict[RoleId, Role]:
        return {r.id: r for r in await self.stores.roles.list_all()}

    async def list_roles(self) -> list[Role]:
        return sorted(await self.stores.roles.list_all(), key=lambda r: r.name)

    async def list_all(self) -> list[User]:
        roles = await self._roles_by_id()
        users = await self.stores.users.list_all()
        return sorted((_with_role(u, roles) for u in users), key=lambda u: u.name)

    async def get(self, user_id: UserId) -> User:
        user = await self.stores.users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return _with_role(user, await self._roles_by_id())

    async def get_by_email(self, email: str) -> User:
        users = await self.stores.users.list_all()
        user = next((u for u in users if u.email == email), None)
        if user is None:
            raise ResourceNotFoundError("User", email)
        return _with_role(user, await self._roles_by_id())

    async def list_by_role(self, role_name: str) -> list[User]:
        roles = await self._roles_by_id()
        role_ids = {r.id for r in roles.values() if r.name == role_name}
        users = await self.stores.users.list_all()
        return sorted(
            (
                _with_role(u, roles) for u in users
                if u.role_id in role_ids and u.is_active
            ),
            key=lambda u: u.name,
        )

    async def create(
        self, name: str, email: str, department: str, role_id: RoleId,
    ) -> User:
        roles = await self._roles_by_id()
        await self._check_user_fields(email, role_id, roles)
        user = User(
            name=name, email=email, department=department, role_id=role_id,
            created_at=self.clock.now(), is_active=True,
        )
        await self.stores.users.insert(user)
        await self.stores.commit()
        logger.info("User created", extra={"user_id": user.id})
        return _with_role(user, roles)

    async def update(
        self, user_id: UserId, name: str, email: str, department: str,
        role_id: RoleId, is_active: bool,
    ) -> User:
        existing = await self.stores.users.get_by_id(user_id)
        if existing is None:
            raise ResourceNotFoundError("User", user_id)
        roles = await self._roles_by_id()
        await self._check_user_fields(email, role_id, roles, user_id=user_id)

        user = replace(
            existing, name=name, email=email, department=department,
            role_id=role_id, is_active=is_active, role=None,
        )
        if not await self.stores.users.update(user):
            raise ResourceNotFoundError("User", user_id)
        await self.stores.commit()
        logger.info("User updated", extra={"user_id": user_id})
        return _with_role(user, roles)

    async def deactivate(self, user_id: UserId) -> bool:
        user = await self.stores.users.get_by_id(user_id)
        if user is None:
            return False
        user.is_active = False
        updated = await self.stores.users.update(user)
        if updated:
            await self.stores.commit()
            logger.info("User deactivated", extra={"user_id": user_id})
        return updated

    async def delete(self, user_id: UserId) -> bool:
        deleted = await self.stores.users.delete(user_id)
        if deleted:
            await self.stores.commit()
            logger.info("User deleted", extra={"user_id": user_id})
        return deleted

    async def _check_user_fields(
        self, email: str, role_id: RoleId, roles: dict[RoleId, Role],
        user_id: UserId | None = None,
    ) -> None:
        if role_id not in roles:
            raise InvalidInputError(f"Unknown role id {role_id}", "role_id")
        users = await self.stores.users.list_all()
        if any(u.email == email and u.id != user_id for u in users):
            raise InvalidInputError("Email is already in use", "email")
