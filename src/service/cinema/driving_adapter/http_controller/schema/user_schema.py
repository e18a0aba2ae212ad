"""
User API Schemas - Pydantic models for request/response
"""

from pydantic import BaseModel, EmailStr, Field, SecretStr

from src.service.cinema.domain.entity.user_entity import UserRole


class CreateUserRequest(BaseModel):
    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=8,
        max_length=30,
        description='Password must be 8-30 characters (bcrypt limit)',
    )
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.USER

    class Config:
        json_schema_extra = {
            'example': {
                'email': 'user@example.com',
                'password': 'P@ssw0rd',
                'name': 'Jane Doe',
                'role': 'user',
            }
        }


class LoginRequest(BaseModel):
    email: EmailStr
    password: SecretStr = Field(
        ..., min_length=1, max_length=72, description='User password (max 72 chars)'
    )

    class Config:
        json_schema_extra = {'example': {'email': 'user@example.com', 'password': 'P@ssw0rd'}}


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool

    class Config:
        from_attributes = True
