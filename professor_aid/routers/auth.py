from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from professor_aid.database import get_db
from professor_aid.models import Identity
from professor_aid.schemas.user import SessionOut, SignInRequest, SignUpRequest, TokenResponse
from professor_aid.services import identity as identity_service
from professor_aid.services.repository import CallerContext
from professor_aid.utils.auth import get_current_caller

router = APIRouter(prefix="/auth", tags=["auth"])


def _token(session) -> TokenResponse:
    return TokenResponse(access_token=session.token, user_id=session.user_id)


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def sign_up(payload: SignUpRequest, db: Session = Depends(get_db)):
    """
    Registers a teacher. The profile is provisioned in the same transaction,
    the response already carries a usable session token.
    """
    session = identity_service.sign_up(db, payload.email, payload.password, payload.full_name)
    return _token(session)


@router.post("/token", response_model=TokenResponse)
def login(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """OAuth2 password flow, username is the email."""
    return _token(identity_service.sign_in(db, form.username, form.password))


@router.post("/signin", response_model=TokenResponse)
def sign_in(payload: SignInRequest, db: Session = Depends(get_db)):
    return _token(identity_service.sign_in(db, payload.email, payload.password))


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(
    scope: str = Query("global", pattern="^(global|local)$"),
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(get_current_caller),
):
    identity_service.sign_out(db, caller, scope=scope)


@router.get("/session", response_model=SessionOut)
def current_session(db: Session = Depends(get_db), caller: CallerContext = Depends(get_current_caller)):
    identity = db.get(Identity, caller.identity_id)
    if not identity:
        raise HTTPException(status_code=404, detail="Not Found")
    return SessionOut(user_id=identity.id, email=identity.email)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(db: Session = Depends(get_db), caller: CallerContext = Depends(get_current_caller)):
    """Deletes the account together with its profile, classes and assignments."""
    if not identity_service.delete_identity(db, caller.identity_id):
        raise HTTPException(status_code=404, detail="Not Found")
