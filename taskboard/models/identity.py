"""Authenticated identity model."""

from typing import Optional
from pydantic import BaseModel, Field


class Identity(BaseModel):
    """The signed-in user behind a request (Supabase auth user)."""
    user_id: str = Field(..., description="Supabase auth user ID")
    email: Optional[str] = Field(None, description="Email address")
    display_name: Optional[str] = Field(None, description="Name from user metadata")
