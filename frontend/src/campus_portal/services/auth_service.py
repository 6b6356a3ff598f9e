"""
Authentication Service
Login, registration and password calls against /auth
"""

from campus_portal.schemas.user import (
    AuthResponse,
    LoginRequest,
    PasswordChange,
    RegisterRequest,
    User,
)
from campus_portal.services.api_client import ApiClient


class AuthService:
    """Service for the API's /auth endpoints"""

    def __init__(self, api: ApiClient):
        self.api = api

    async def login(self, email: str, password: str) -> AuthResponse:
        body = LoginRequest(email=email, password=password).to_api()
        return AuthResponse.model_validate(await self.api.post("/auth/login", json=body))

    async def register(self, request: RegisterRequest) -> AuthResponse:
        return AuthResponse.model_validate(await self.api.post("/auth/register", json=request.to_api()))

    async def me(self) -> User:
        return User.model_validate(await self.api.get("/auth/me"))

    async def logout(self) -> None:
        await self.api.post("/auth/logout")

    async def change_password(self, current_password: str, new_password: str) -> None:
        body = PasswordChange(current_password=current_password, new_password=new_password).to_api()
        await self.api.post("/auth/change-password", json=body)
