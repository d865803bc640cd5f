"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    message: str
    token: str


class ForgotPasswordRequest(BaseModel):
    email: str = ""


class ResetPasswordRequest(BaseModel):
    token: str = ""
    new_password: str = Field(default="", alias="newPassword")

    model_config = ConfigDict(populate_by_name=True)


class ResetTokenInfo(BaseModel):
    username: str


class MessageResponse(BaseModel):
    message: str
