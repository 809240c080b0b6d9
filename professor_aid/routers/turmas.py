from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from professor_aid.schemas.turma import TurmaCreate, TurmaOut, TurmaUpdate
from professor_aid.services.repository import Repository
from professor_aid.utils.auth import get_repository

router = APIRouter(prefix="/turmas", tags=["Turmas"])

NOT_FOUND = "Turma não encontrada"


@router.get("", response_model=List[TurmaOut])
def list_turmas(repo: Repository = Depends(get_repository)):
    """Classes of the current teacher, newest first."""
    return repo.list_turmas()


@router.post("", response_model=TurmaOut, status_code=status.HTTP_201_CREATED)
def create_turma(payload: TurmaCreate, repo: Repository = Depends(get_repository)):
    """Creates a class owned by the caller's profile."""
    return repo.create_turma(**payload.model_dump())


@router.get("/{turma_id}", response_model=TurmaOut)
def get_turma(turma_id: str, repo: Repository = Depends(get_repository)):
    turma = repo.get_turma(turma_id)
    if not turma:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return turma


@router.patch("/{turma_id}", response_model=TurmaOut)
def update_turma(turma_id: str, payload: TurmaUpdate, repo: Repository = Depends(get_repository)):
    turma = repo.update_turma(turma_id, **payload.model_dump(exclude_unset=True))
    if not turma:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return turma


@router.delete("/{turma_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_turma(turma_id: str, repo: Repository = Depends(get_repository)):
    """
    Deletes the class and, in the same transaction, every assignment in it.
    Classes of other teachers answer 404 like missing ones.
    """
    if not repo.delete_turma(turma_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
