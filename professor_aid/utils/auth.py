from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from passlib.context import CryptContext

from professor_aid.database import get_db
from professor_aid.exceptions import InvalidCredentials
from professor_aid.services.repository import Repository

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


def get_current_caller(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)):
    # imported here, services.identity itself imports the hashing helpers above
    from professor_aid.services.identity import resolve_session

    try:
        return resolve_session(db, token)
    except InvalidCredentials as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=err.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from err


def get_repository(db: Session = Depends(get_db), caller=Depends(get_current_caller)) -> Repository:
    return Repository(db, caller)
