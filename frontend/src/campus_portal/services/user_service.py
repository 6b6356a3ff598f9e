"""
User Service
Profile updates and admin user management
"""

from typing import List

from campus_portal.schemas.user import Department, User, UserRole, UserUpdate
from campus_portal.services.api_client import ApiClient


class UserService:
    """Service for /users and /departments"""

    def __init__(self, api: ApiClient):
        self.api = api

    async def update(self, user_id: int, changes: UserUpdate) -> User:
        return User.model_validate(await self.api.put(f"/users/{user_id}", json=changes.to_api()))

    async def list(self) -> List[User]:
        return [User.model_validate(item) for item in await self.api.get("/users")]

    async def activate(self, user_id: int) -> User:
        return User.model_validate(await self.api.patch(f"/users/{user_id}/activate"))

    async def deactivate(self, user_id: int) -> User:
        return User.model_validate(await self.api.patch(f"/users/{user_id}/deactivate"))

    async def change_role(self, user_id: int, role: UserRole) -> User:
        data = await self.api.patch(f"/users/{user_id}/role", params={"role": role.value})
        return User.model_validate(data)

    async def remove(self, user_id: int) -> None:
        await self.api.delete(f"/users/{user_id}")

    async def departments(self) -> List[Department]:
        return [Department.model_validate(item) for item in await self.api.get("/departments")]
