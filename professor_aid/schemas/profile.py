from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ProfileOut(BaseModel):
    id: str
    user_id: str
    nome: str
    email: str
    escola: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    nome: str = Field(default=None, min_length=1)
    escola: Optional[str] = None
