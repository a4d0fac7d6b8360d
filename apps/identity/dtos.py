"""DTOs for Identity app."""
from dataclasses import dataclass

from ninja import Schema
from pydantic import Field


@dataclass(frozen=True)
class UserDTO:
    id: int
    email: str


class CredentialsIn(Schema):
    email: str = Field(min_length=5, max_length=30)
    password: str = Field(min_length=8, max_length=50)


class InfoOut(Schema):
    info: str = "success"
