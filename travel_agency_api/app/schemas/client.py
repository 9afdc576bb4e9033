"""
Pydantic models for clients.

``ClientCreate`` is the request body for creating a client.  Required
names may not be blank and the email must be well formed; optional
contact fields become ``None`` when omitted or blank.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class ClientCreate(BaseModel):
    first_name: str = Field(..., alias="FirstName", min_length=1, examples=["Ana"])
    last_name: str = Field(..., alias="LastName", min_length=1, examples=["Nowak"])
    email: EmailStr = Field(..., alias="Email", examples=["ana@example.com"])
    telephone: Optional[str] = Field(None, alias="Telephone", examples=["+48 600 100 200"])
    # Polish national identification number.
    pesel: Optional[str] = Field(None, alias="Pesel", examples=["90010112345"])

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("first_name", "last_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("telephone", "pesel")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class ClientCreated(BaseModel):
    """Response body returned after a client is created."""

    id_client: int = Field(..., alias="IdClient")

    model_config = {
        "populate_by_name": True,
    }
