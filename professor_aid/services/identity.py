"""
Identity lifecycle: sign-up, sign-in, sign-out and account deletion.

Sign-up inserts the identity and, through the provisioning trigger, its
profile in a single transaction. Sessions are rows in auth_sessions; signing
out deletes them, which is the only session state the service keeps.
"""

from __future__ import annotations

import logging
import secrets
from uuid import uuid4

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from professor_aid import config
from professor_aid.exceptions import IdentityAlreadyExists, InvalidCredentials, ValidationFailed
from professor_aid.models import AuthSession, Identity
from professor_aid.services.repository import CallerContext, constraint_from_integrity_error
from professor_aid.utils.auth import get_password_hash, verify_password

logger = logging.getLogger(__name__)

SIGN_OUT_SCOPES = ("global", "local")


def _normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _new_session(db: Session, identity_id: str) -> AuthSession:
    session = AuthSession(token=secrets.token_urlsafe(32), user_id=identity_id)
    db.add(session)
    return session


def sign_up(db: Session, email: str, password: str, full_name: str | None) -> AuthSession:
    email = _normalize_email(email)
    if not email or not password or not (full_name or "").strip():
        raise ValidationFailed("Email, password and full name are required")
    if len(password) < config.PASSWORD_MIN_LENGTH:
        raise ValidationFailed(
            f"Password must be at least {config.PASSWORD_MIN_LENGTH} characters",
            details={"min_length": config.PASSWORD_MIN_LENGTH},
        )
    if db.query(Identity).filter(Identity.email == email).first():
        raise IdentityAlreadyExists(email)

    identity = Identity(
        id=str(uuid4()),
        email=email,
        password_hash=get_password_hash(password),
        full_name=full_name.strip(),
    )
    db.add(identity)
    session = _new_session(db, identity.id)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise constraint_from_integrity_error(err) from err

    db.refresh(session)
    logger.info("Identity %s signed up", identity.id)
    return session


def sign_in(db: Session, email: str, password: str) -> AuthSession:
    identity = db.query(Identity).filter(Identity.email == _normalize_email(email)).first()
    if not identity or not verify_password(password or "", identity.password_hash):
        raise InvalidCredentials()

    session = _new_session(db, identity.id)
    db.commit()
    db.refresh(session)
    logger.info("Identity %s signed in", identity.id)
    return session


def resolve_session(db: Session, token: str | None) -> CallerContext:
    session = db.get(AuthSession, token) if token else None
    if session is None:
        raise InvalidCredentials("Invalid or expired session")
    return CallerContext(identity_id=session.user_id, token=session.token)


def sign_out(db: Session, caller: CallerContext, scope: str = "global") -> int:
    """
    Tears down session state. `local` drops the current token, `global`
    drops every session of the identity. Returns how many were removed.
    """
    if scope not in SIGN_OUT_SCOPES:
        raise ValidationFailed(f"Unknown sign-out scope {scope!r}", details={"scope": scope})

    query = db.query(AuthSession).filter(AuthSession.user_id == caller.identity_id)
    if scope == "local":
        query = query.filter(AuthSession.token == caller.token)
    removed = query.delete(synchronize_session=False)
    db.commit()
    logger.info("Identity %s signed out (%s, %d session(s))", caller.identity_id, scope, removed)
    return removed


def delete_identity(db: Session, identity_id: str) -> bool:
    """Removes the identity; the store cascades to profile, turmas, atividades and sessions."""
    identity = db.get(Identity, identity_id)
    if identity is None:
        return False
    db.delete(identity)
    db.commit()
    logger.info("Identity %s deleted with its profile and classes", identity_id)
    return True
