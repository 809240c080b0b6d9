from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TurmaCreate(BaseModel):
    nome: str = Field(min_length=1)
    ano_letivo: str = Field(default_factory=lambda: str(datetime.now().year))
    # matutino | vespertino | noturno, checked by the model
    periodo: Optional[str] = None
    descricao: Optional[str] = None


class TurmaUpdate(BaseModel):
    # left out means unchanged, explicit null is refused for NOT NULL columns
    nome: str = Field(default=None, min_length=1)
    ano_letivo: str = None
    periodo: Optional[str] = None
    descricao: Optional[str] = None


class TurmaOut(BaseModel):
    id: str
    professor_id: str
    nome: str
    ano_letivo: str
    periodo: Optional[str] = None
    descricao: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
