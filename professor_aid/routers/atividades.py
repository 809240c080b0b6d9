from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from professor_aid.schemas.atividade import AtividadeCreate, AtividadeOut, AtividadeUpdate, StatusUpdate
from professor_aid.services.repository import Repository
from professor_aid.utils.auth import get_repository

router = APIRouter(prefix="/atividades", tags=["Atividades"])

NOT_FOUND = "Atividade não encontrada"


@router.get("", response_model=List[AtividadeOut])
def list_atividades(
    turma_id: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status", pattern="^(ativa|finalizada|cancelada)$"),
    repo: Repository = Depends(get_repository),
):
    return repo.list_atividades(turma_id=turma_id, status=status_filter)


@router.post("", response_model=AtividadeOut, status_code=status.HTTP_201_CREATED)
def create_atividade(payload: AtividadeCreate, repo: Repository = Depends(get_repository)):
    """Creates an assignment in one of the caller's classes. Omitted status defaults to `ativa`."""
    fields = payload.model_dump(exclude_unset=True)
    return repo.create_atividade(**fields)


@router.get("/{atividade_id}", response_model=AtividadeOut)
def get_atividade(atividade_id: str, repo: Repository = Depends(get_repository)):
    atividade = repo.get_atividade(atividade_id)
    if not atividade:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return atividade


@router.patch("/{atividade_id}", response_model=AtividadeOut)
def update_atividade(atividade_id: str, payload: AtividadeUpdate, repo: Repository = Depends(get_repository)):
    atividade = repo.update_atividade(atividade_id, **payload.model_dump(exclude_unset=True))
    if not atividade:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return atividade


@router.patch("/{atividade_id}/status", response_model=AtividadeOut)
def update_status(atividade_id: str, payload: StatusUpdate, repo: Repository = Depends(get_repository)):
    atividade = repo.update_atividade_status(atividade_id, payload.status)
    if not atividade:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return atividade


@router.delete("/{atividade_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_atividade(atividade_id: str, repo: Repository = Depends(get_repository)):
    if not repo.delete_atividade(atividade_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
