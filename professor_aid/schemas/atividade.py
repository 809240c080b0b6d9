from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from professor_aid.schemas.turma import TurmaOut


class AtividadeCreate(BaseModel):
    turma_id: str
    titulo: str = Field(min_length=1)
    descricao: Optional[str] = None
    data_entrega: Optional[date] = None
    # enum values are checked by the model so errors name the constraint
    tipo: Optional[str] = None
    status: Optional[str] = None


class AtividadeUpdate(BaseModel):
    turma_id: str = None
    titulo: str = Field(default=None, min_length=1)
    descricao: Optional[str] = None
    data_entrega: Optional[date] = None
    tipo: Optional[str] = None
    status: Optional[str] = None


class StatusUpdate(BaseModel):
    status: str


class AtividadeOut(BaseModel):
    id: str
    turma_id: str
    titulo: str
    descricao: Optional[str] = None
    data_entrega: Optional[date] = None
    tipo: Optional[str] = None
    status: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    turma: Optional[TurmaOut] = None

    class Config:
        from_attributes = True


class DashboardOut(BaseModel):
    turmas: int
    atividades: int
    atividades_pendentes: int
    recentes: List[AtividadeOut] = []
