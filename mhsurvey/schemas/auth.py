from pydantic import BaseModel, EmailStr

from mhsurvey.models.user import User


class LoginIn(BaseModel):
    email: EmailStr
    password: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User


class HomeOut(BaseModel):
    user: User
    home: str  # ruta de inicio según el rol
