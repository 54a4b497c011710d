import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from flask import current_app
from flask_jwt_extended import create_access_token, get_jwt

from nexus_cms.domain.exceptions import Forbidden, Unauthenticated, ValidationError
from nexus_cms.extensions import db
from nexus_cms.models.base import as_utc
from nexus_cms.models.user import TokenBlocklist, User
from nexus_cms.utils import validation
from nexus_cms.utils.mailer import send_email
from nexus_cms.utils.transaction import transactional
from .users import users

VERIFICATION_CODE_MINUTES = 15


def issue_token(user: User) -> Dict[str, Any]:
    """Access token carrying the resolved permission and role names."""
    expires = timedelta(minutes=current_app.config["JWT_ACCESS_TOKEN_MINUTES"])
    token = create_access_token(
        identity=str(user.id),
        additional_claims={
            "permissions": sorted(user.permission_names()),
            "roles": user.role_names(),
        },
        expires_delta=expires,
    )
    return {
        "token": token,
        "token_type": "bearer",
        "expires_in": int(expires.total_seconds()),
    }


def login(*, data: Dict[str, Any]) -> Dict[str, Any]:
    email = validation.email(data, "email", required=True)
    password = validation.string(data, "password", required=True)

    user = User.query.filter_by(email=email).first()
    if user is None or not user.check_password(password):
        current_app.logger.warning(f"Failed login attempt for {email}")
        raise Unauthenticated("Authentication failed")

    if not user.is_active:
        current_app.logger.warning(f"Login attempt for inactive account {email}")
        raise Forbidden("Your account is inactive. Please contact the administrator.")

    return {"user": user, **issue_token(user)}


def revoke_current_token() -> None:
    jti = get_jwt()["jti"]
    with transactional():
        db.session.add(TokenBlocklist(jti=jti))


def refresh(*, user: User) -> Dict[str, Any]:
    revoke_current_token()
    return issue_token(user)


def is_token_revoked(jti: str) -> bool:
    return db.session.query(TokenBlocklist.id).filter_by(jti=jti).first() is not None


# -------------------------------------------------
# Profile change with email verification
# -------------------------------------------------

def request_profile_update(*, user: User) -> None:
    """
    Store a six-digit code and mail it to the principal.

    The mail is best effort: the code is stored whether or not it is sent.
    """
    code = f"{secrets.randbelow(1_000_000):06d}"
    with transactional():
        user.email_verification_code = code
        user.email_verification_expires_at = datetime.now(timezone.utc) + timedelta(
            minutes=VERIFICATION_CODE_MINUTES
        )

    send_email(
        [user.email],
        "Your verification code",
        f"Hello {user.name},\n\n"
        f"Your verification code is {code}. It expires in {VERIFICATION_CODE_MINUTES} minutes.\n\n"
        "If you did not request a change to your account, you can ignore this message.",
    )


def confirm_profile_update(*, user: User, data: Dict[str, Any]) -> User:
    code = validation.string(data, "code", required=True, max_length=6)
    expires_at = as_utc(user.email_verification_expires_at)

    if (
        not user.email_verification_code
        or not secrets.compare_digest(user.email_verification_code, code)
        or expires_at is None
        or expires_at < datetime.now(timezone.utc)
    ):
        raise Forbidden("Invalid or expired verification code")

    changes = {
        field: data[field]
        for field in ("name", "email", "password", "password_confirmation", "bio", "profile_image")
        if field in data
    }
    if not changes:
        raise ValidationError("Nothing to update")

    user = users.update(user, changes, actor=user)

    with transactional():
        user.email_verification_code = None
        user.email_verification_expires_at = None

    return user
