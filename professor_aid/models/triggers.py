"""
Row triggers expressed as SQLAlchemy mapper events. Both run inside the
flush, so their writes share the transaction of the statement that fired
them.
"""

import logging
from uuid import uuid4

from sqlalchemy import event

from professor_aid import config
from professor_aid.database import utcnow
from professor_aid.models.identity import Identity
from professor_aid.models.profile import Profile
from professor_aid.models.turma import Turma
from professor_aid.models.atividade import Atividade

logger = logging.getLogger(__name__)

TIMESTAMPED_MODELS = (Profile, Turma, Atividade)


def profile_name_from_metadata(full_name: str | None) -> str:
    name = (full_name or "").strip()
    return name or config.DEFAULT_PROFILE_NAME


@event.listens_for(Identity, "after_insert")
def provision_profile(mapper, connection, target: Identity):
    """
    Creates the profile of a freshly inserted identity. A duplicate user_id
    makes the INSERT fail and the whole flush (identity included) is rolled
    back.
    """
    now = utcnow()
    profile_id = str(uuid4())
    connection.execute(
        Profile.__table__.insert().values(
            id=profile_id,
            user_id=target.id,
            nome=profile_name_from_metadata(target.full_name),
            email=target.email,
            created_at=now,
            updated_at=now,
        )
    )
    logger.info("Provisioned profile %s for identity %s", profile_id, target.id)


def touch_updated_at(mapper, connection, target):
    # caller supplied updated_at values are discarded
    target.updated_at = utcnow()


for _model in TIMESTAMPED_MODELS:
    event.listen(_model, "before_update", touch_updated_at)
