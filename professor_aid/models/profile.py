from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from professor_aid.database import Base, utcnow


class Profile(Base):
    """Teacher account record, exactly one per identity."""
    __tablename__ = "profiles"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("identities.id", ondelete="CASCADE"), unique=True, nullable=False)
    nome = Column(String, nullable=False)
    email = Column(String, nullable=False)
    escola = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    identity = relationship("Identity", back_populates="profile")
    turmas = relationship(
        "Turma",
        back_populates="professor",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
