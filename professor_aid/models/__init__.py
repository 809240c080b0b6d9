from professor_aid.models.identity import Identity, AuthSession
from professor_aid.models.profile import Profile
from professor_aid.models.turma import Turma, PERIODOS
from professor_aid.models.atividade import Atividade, TIPOS, STATUSES
from professor_aid.models import triggers

__all__ = [
    "Identity",
    "AuthSession",
    "Profile",
    "Turma",
    "Atividade",
    "PERIODOS",
    "TIPOS",
    "STATUSES",
    "triggers",
]
