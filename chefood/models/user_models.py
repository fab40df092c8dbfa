from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    organization_id: Optional[str] = None
    avatar_url: Optional[str] = None
    dietary_preferences: List[str] = Field(default_factory=list)
    favorite_cuisines: List[str] = Field(default_factory=list)
    cooking_skill_level: Optional[Literal["beginner", "intermediate", "advanced"]] = None
    created_at: Optional[datetime] = None
    subscription_plan: Optional[str] = None

    @field_validator("id", "organization_id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if v is None:
            return None
        return str(v)


class LoginRequest(BaseModel):
    email: str
    password: str
    remember_me: bool = False


class RegisterRequest(BaseModel):
    first_name: str
    last_name: str
    email: str
    password: str
    organization_name: Optional[str] = None


class AuthResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user: Optional[User] = None


class UserUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None


class PreferencesUpdate(BaseModel):
    dietary_preferences: Optional[List[str]] = None
    favorite_cuisines: Optional[List[str]] = None
    cooking_skill_level: Optional[Literal["beginner", "intermediate", "advanced"]] = None


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


class DeleteAccountRequest(BaseModel):
    password: str
    confirmation: str


class NotificationSettings(BaseModel):
    email: bool = True
    push: bool = False
    sms: bool = False
    marketing: bool = False
    recipes: bool = True
    mealPlans: bool = True
    quietHoursStart: Optional[str] = None
    quietHoursEnd: Optional[str] = None
    frequency: Optional[str] = None


class PrivacySettings(BaseModel):
    profileVisibility: Literal["public", "private", "friends"] = "private"
    dataSharing: bool = False
    analytics: bool = False
    thirdParty: bool = False


class MessageResponse(BaseModel):
    message: str


class ExportedProfile(BaseModel):
    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    organization_name: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)


class UserDataExport(BaseModel):
    """GDPR data export; recipes and meal plans are kept as raw dicts."""
    profile: ExportedProfile
    preferences: Dict[str, str] = Field(default_factory=dict)
    dietary_restrictions: List[Dict[str, str]] = Field(default_factory=list)
    recipes: List[dict] = Field(default_factory=list)
    meal_plans: List[dict] = Field(default_factory=list)
    export_date: Optional[datetime] = None
    export_format_version: Optional[str] = None
