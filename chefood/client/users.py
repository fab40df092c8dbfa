from typing import BinaryIO

from chefood.client.http import ApiClient, unwrap
from chefood.models.user_models import PreferencesUpdate, User, UserUpdate


class UserAPI:
    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.session = client.session

    async def update_profile(self, patch: UserUpdate) -> User:
        body = await self.client.put(
            "/api/v1/users/profile", json=patch.model_dump(exclude_none=True)
        )
        user = User.model_validate(unwrap(body))
        self.session.set_user(user)
        return user

    async def upload_avatar(
        self, filename: str, fileobj: BinaryIO, content_type: str = "image/jpeg"
    ) -> str:
        """Upload a profile picture; returns the new avatar URL."""
        body = await self.client.post(
            "/api/v1/users/avatar",
            files={"file": (filename, fileobj, content_type)},
        )
        return unwrap(body)["avatar_url"]

    async def update_preferences(self, prefs: PreferencesUpdate) -> User:
        body = await self.client.put(
            "/api/v1/users/preferences", json=prefs.model_dump(exclude_none=True)
        )
        user = User.model_validate(unwrap(body))
        self.session.set_user(user)
        return user
