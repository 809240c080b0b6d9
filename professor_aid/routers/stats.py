from fastapi import APIRouter, Depends

from professor_aid.schemas.atividade import DashboardOut
from professor_aid.services.repository import Repository
from professor_aid.utils.auth import get_repository

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(repo: Repository = Depends(get_repository)):
    """
    Dashboard counters: classes, assignments, pending (status `ativa`)
    assignments and the latest assignments.
    """
    return repo.dashboard()
