"""
Explicit session object holding the access token, refresh token and the
cached user. Storage is injected so the same session works against memory
(tests), a local SQLite file, or anything implementing KeyValueStorage.
"""
import base64
import json
import logging
import time
from typing import Dict, List, Optional

from pydantic import ValidationError

from chefood.client.storage import KeyValueStorage
from chefood.core.config import settings
from chefood.models.user_models import User

logger = logging.getLogger(__name__)

# Values left behind when "undefined"/"null" got stringified into storage
CORRUPTED_VALUES = {"undefined", "null"}


class TokenSession:
    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        token_key: str = settings.token_key,
        refresh_token_key: str = settings.refresh_token_key,
        user_key: str = settings.user_key,
    ) -> None:
        self.storage = storage
        self.token_key = token_key
        self.refresh_token_key = refresh_token_key
        self.user_key = user_key

    def _read(self, key: str) -> Optional[str]:
        value = self.storage.get_item(key)
        if not value or value in CORRUPTED_VALUES:
            return None
        return value

    def _read_token(self, key: str) -> Optional[str]:
        raw = self._read(key)
        if raw is None:
            return None
        try:
            value = json.loads(raw)
        except ValueError:
            # Bare token written by an older client
            return raw
        return value if isinstance(value, str) and value else None

    def get_access_token(self) -> Optional[str]:
        return self._read_token(self.token_key)

    def get_refresh_token(self) -> Optional[str]:
        return self._read_token(self.refresh_token_key)

    def set_access_token(self, token: str) -> None:
        self.storage.set_item(self.token_key, json.dumps(token))

    def set_refresh_token(self, token: str) -> None:
        self.storage.set_item(self.refresh_token_key, json.dumps(token))

    def set_tokens(self, access_token: str, refresh_token: Optional[str] = None) -> None:
        self.set_access_token(access_token)
        if refresh_token:
            self.set_refresh_token(refresh_token)

    def get_user(self) -> Optional[User]:
        raw = self._read(self.user_key)
        if raw is None:
            return None
        try:
            return User.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Failed to parse cached user, clearing it: %s", e)
            self.storage.remove_item(self.user_key)
            return None

    def set_user(self, user: User) -> None:
        self.storage.set_item(self.user_key, user.model_dump_json())

    def clear(self) -> None:
        for key in (self.token_key, self.refresh_token_key, self.user_key):
            self.storage.remove_item(key)

    def cleanup_invalid(self) -> List[str]:
        """Remove keys holding the strings "undefined"/"null". Returns the removed keys."""
        removed = []
        for key in (self.token_key, self.refresh_token_key, self.user_key):
            if self.storage.get_item(key) in CORRUPTED_VALUES:
                logger.warning("Cleaning corrupted storage key: %s", key)
                self.storage.remove_item(key)
                removed.append(key)
        return removed

    @staticmethod
    def is_token_expired(token: str, now: Optional[float] = None) -> bool:
        """
        Check the `exp` claim of a JWT without verifying the signature.

        Anything that cannot be decoded counts as expired. A token without
        an `exp` claim never expires.
        """
        try:
            payload_part = token.split(".")[1]
            padded = payload_part + "=" * (-len(payload_part) % 4)
            payload = json.loads(base64.urlsafe_b64decode(padded))
        except (IndexError, ValueError):
            return True

        if not isinstance(payload, dict):
            return True
        exp = payload.get("exp")
        if exp is None:
            return False
        try:
            return float(exp) < (time.time() if now is None else now)
        except (TypeError, ValueError):
            return True

    def is_authenticated(self) -> bool:
        token = self.get_access_token()
        return token is not None and not self.is_token_expired(token)

    def auth_header(self) -> Dict[str, str]:
        token = self.get_access_token()
        return {"Authorization": f"Bearer {token}"} if token else {}
