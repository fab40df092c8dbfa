from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Main backend; every /api call goes here
    api_url: str = "https://chefoodai-backend-mpsrniojta-uc.a.run.app"

    # AI service, only reached through the frontend proxy
    ai_service_url: str = "https://chefoodai-ai-service-mpsrniojta-uc.a.run.app"

    # Seconds. Meal plan generation can take several minutes.
    request_timeout: float = 600.0

    # Where the session (tokens + cached user) is persisted
    storage_url: str = "sqlite:///./chefood_session.db"

    storage_echo: bool = False

    token_key: str = "chefoodai_token"
    refresh_token_key: str = "chefoodai_refresh_token"
    user_key: str = "chefoodai_user"

    # Built SPA. When unset the server looks for ./build, then ./dist
    static_dir: str | None = None

    port: int = 8000

    allowed_origins: List[str] = ["http://localhost:3000"]

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
