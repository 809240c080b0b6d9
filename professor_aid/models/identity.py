from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from professor_aid.database import Base, utcnow


class Identity(Base):
    """
    External identity (login). Its profile is provisioned by a trigger,
    see models/triggers.py.
    """
    __tablename__ = "identities"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    full_name = Column(String, nullable=True)  # sign-up metadata
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # 1:1, the row is inserted by the provisioning trigger
    profile = relationship(
        "Profile",
        back_populates="identity",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    sessions = relationship(
        "AuthSession",
        back_populates="identity",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class AuthSession(Base):
    __tablename__ = "auth_sessions"

    token = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("identities.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    identity = relationship("Identity", back_populates="sessions")
