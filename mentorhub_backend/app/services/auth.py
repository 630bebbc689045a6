from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import Unauthorized
from app.models.account import Account
from app.services import identity

_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/signin", auto_error=False)


def get_current_account(
    token: str | None = Depends(_oauth2_scheme),
    db: Session = Depends(get_db),
) -> Account:
    if not token:
        raise Unauthorized("Authorization token required")
    account = identity.get_user(db, token)
    if account is None:
        raise Unauthorized("Unauthorized")
    return account
