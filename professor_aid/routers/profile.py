from fastapi import APIRouter, Depends, HTTPException

from professor_aid.schemas.profile import ProfileOut, ProfileUpdate
from professor_aid.services.repository import Repository
from professor_aid.utils.auth import get_repository

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileOut)
def get_profile(repo: Repository = Depends(get_repository)):
    profile = repo.get_profile()
    if not profile:
        raise HTTPException(status_code=404, detail="Perfil não encontrado")
    return profile


@router.patch("", response_model=ProfileOut)
def update_profile(payload: ProfileUpdate, repo: Repository = Depends(get_repository)):
    profile = repo.update_profile(**payload.model_dump(exclude_unset=True))
    if not profile:
        raise HTTPException(status_code=404, detail="Perfil não encontrado")
    return profile
