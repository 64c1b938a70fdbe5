from pydantic import BaseModel, ConfigDict, Field


class TokenRequest(BaseModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1)


class UserRegister(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=128)
    first_name: str = Field(alias="firstName", min_length=1, max_length=30)
    last_name: str = Field(alias="lastName", min_length=1, max_length=30)
    email: str = Field(min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$")


class UserCreate(UserRegister):
    """Admin-only variant of registration that may grant admin rights."""

    is_admin: bool = Field(False, alias="isAdmin")


class UserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    is_admin: bool = Field(alias="isAdmin")


class TokenResponse(BaseModel):
    token: str


class UserEnvelope(BaseModel):
    user: UserResponse


class UserCreatedResponse(BaseModel):
    user: UserResponse
    token: str


class UserDeletedResponse(BaseModel):
    deleted: str
