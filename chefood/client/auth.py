import logging

from chefood.client.errors import ApiError
from chefood.client.http import ApiClient, unwrap
from chefood.models.user_models import (
    AuthResponse,
    ChangePasswordRequest,
    DeleteAccountRequest,
    LoginRequest,
    MessageResponse,
    NotificationSettings,
    PrivacySettings,
    RegisterRequest,
    User,
    UserDataExport,
)

logger = logging.getLogger(__name__)


class AuthAPI:
    """Authentication and account endpoints. Keeps the session in sync."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.session = client.session

    def _store_auth(self, auth: AuthResponse) -> None:
        self.session.set_tokens(auth.access_token, auth.refresh_token)
        if auth.user is not None:
            self.session.set_user(auth.user)

    async def login(self, credentials: LoginRequest) -> AuthResponse:
        body = await self.client.post("/api/v1/auth/login", json=credentials.model_dump())
        auth = AuthResponse.model_validate(body)
        self._store_auth(auth)
        return auth

    async def register(self, data: RegisterRequest) -> AuthResponse:
        body = await self.client.post(
            "/api/v1/auth/register", json=data.model_dump(exclude_none=True)
        )
        auth = AuthResponse.model_validate(body)
        self._store_auth(auth)
        return auth

    def logout(self) -> None:
        # The backend has no logout endpoint; dropping the tokens is the logout
        logger.info("Logging out, clearing local session")
        self.session.clear()

    async def forgot_password(self, email: str) -> None:
        await self.client.post("/api/v1/auth/forgot-password", json={"email": email})

    async def reset_password(self, token: str, password: str) -> None:
        await self.client.post(
            "/api/v1/auth/reset-password", json={"token": token, "password": password}
        )

    async def get_current_user(self) -> User:
        body = await self.client.get("/api/v1/users/me")
        user = User.model_validate(unwrap(body))
        self.session.set_user(user)
        return user

    async def refresh_token(self) -> AuthResponse:
        refresh_token = self.session.get_refresh_token()
        if not refresh_token:
            raise ApiError(None, "No refresh token available")

        body = await self.client.post(
            "/api/v1/auth/refresh", json={"refresh_token": refresh_token}
        )
        auth = AuthResponse.model_validate(body)
        self._store_auth(auth)
        return auth

    async def change_password(self, data: ChangePasswordRequest) -> MessageResponse:
        body = await self.client.put("/api/v1/users/change-password", json=data.model_dump())
        return MessageResponse.model_validate(body)

    async def export_user_data(self) -> UserDataExport:
        body = await self.client.get("/api/v1/users/export-data")
        return UserDataExport.model_validate(body)

    async def delete_account(self, data: DeleteAccountRequest) -> MessageResponse:
        body = await self.client.delete("/api/v1/users/account", json=data.model_dump())
        self.session.clear()
        return MessageResponse.model_validate(body)

    async def get_notification_settings(self) -> NotificationSettings:
        body = await self.client.get("/api/v1/users/notification-settings")
        return NotificationSettings.model_validate(body)

    async def update_notification_settings(self, prefs: NotificationSettings) -> MessageResponse:
        body = await self.client.put(
            "/api/v1/users/notification-settings", json=prefs.model_dump(exclude_none=True)
        )
        return MessageResponse.model_validate(body)

    async def get_privacy_settings(self) -> PrivacySettings:
        body = await self.client.get("/api/v1/users/privacy-settings")
        return PrivacySettings.model_validate(body)

    async def update_privacy_settings(self, prefs: PrivacySettings) -> MessageResponse:
        body = await self.client.put("/api/v1/users/privacy-settings", json=prefs.model_dump())
        return MessageResponse.model_validate(body)
