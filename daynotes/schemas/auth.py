"""DayNotes Backend — Login Request/Response Schemas"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)


class LoginUser(BaseModel):
    """Minimal identity returned on login. Never carries the password hash."""
    id: int
    username: str


class LoginResponse(BaseModel):
    message: str = Field(default="Login successful")
    user: LoginUser
