"""
Auth API schemas (response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProfileResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    contact_email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str
    profile_picture_url: str | None = None
