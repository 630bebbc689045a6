"""Local identity provider.

Accounts, password sign-in and bearer-token verification. The rest of the
portal only talks to it through ``create_account``, ``sign_in_with_password``
and ``get_user``.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from app.core.security import create_access_token, decode_access_token, hash_password, verify_password
from app.models.account import Account


class IdentityError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def create_account(db: Session, email: str, password: str, metadata: dict[str, Any] | None = None) -> Account:
    normalized = email.strip().lower()
    if db.query(Account).filter(Account.email == normalized).first():
        raise IdentityError("A user with this email address has already been registered")
    if len(password) < 6:
        raise IdentityError("Password should be at least 6 characters")
    account = Account(
        id=str(uuid.uuid4()),
        email=normalized,
        hashed_password=hash_password(password),
        user_metadata=dict(metadata or {}),
        # No mail server: accounts are confirmed on creation.
        email_confirmed=True,
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


def sign_in_with_password(db: Session, email: str, password: str) -> tuple[Account, str]:
    account = db.query(Account).filter(Account.email == email.strip().lower()).first()
    if account is None or not verify_password(password, account.hashed_password):
        raise IdentityError("Invalid login credentials")
    account.last_sign_in_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(account)
    return account, create_access_token(account.id, email=account.email)


def get_user(db: Session, token: str) -> Account | None:
    account_id = decode_access_token(token)
    if account_id is None:
        return None
    return db.get(Account, account_id)
