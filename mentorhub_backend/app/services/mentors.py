from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from app.core.exceptions import Unauthorized, ValidationFailed
from app.core.logging_config import logger
from app.models.account import Account
from app.schemas.auth import SigninRequest, SignupRequest
from app.services import identity, kv_store


def mentor_key(account_id: str) -> str:
    return f"mentor:{account_id}"


def signup(db: Session, payload: SignupRequest) -> Account:
    if not payload.email or not payload.password or not payload.name:
        raise ValidationFailed("Email, password, and name are required")
    try:
        account = identity.create_account(
            db,
            payload.email,
            payload.password,
            metadata={
                "name": payload.name,
                "department": payload.department,
                "contact": payload.contact,
                "role": "mentor",
            },
        )
    except identity.IdentityError as e:
        logger.log_auth_event("signup", False, user_email=payload.email, reason=e.message)
        raise ValidationFailed(e.message)

    kv_store.set(
        db,
        mentor_key(account.id),
        {
            "id": account.id,
            "email": account.email,
            "name": payload.name,
            "department": payload.department,
            "contact": payload.contact,
            "created_at": datetime.now(timezone.utc).isoformat(),
        },
    )
    logger.log_auth_event("signup", True, user_email=account.email)
    return account


def signin(db: Session, payload: SigninRequest) -> tuple[Account, str, dict[str, Any] | None]:
    if not payload.email or not payload.password:
        raise ValidationFailed("Email and password are required")
    try:
        account, token = identity.sign_in_with_password(db, payload.email, payload.password)
    except identity.IdentityError as e:
        logger.log_auth_event("signin", False, user_email=payload.email, reason=e.message)
        raise Unauthorized(e.message)
    logger.log_auth_event("signin", True, user_email=account.email)
    return account, token, get_mentor_profile(db, account.id)


def get_mentor_profile(db: Session, account_id: str) -> dict[str, Any] | None:
    return kv_store.get(db, mentor_key(account_id))
