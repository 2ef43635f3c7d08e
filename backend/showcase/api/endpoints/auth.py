"""Authentication and account endpoints."""

from __future__ import annotations

from flask import Blueprint

from showcase.api.deps import (
    client_key,
    get_rate_limiter,
    json_body,
    json_response,
    require_auth,
    service_context,
    timing,
)
from showcase.api.session import get_cookie_manager, get_identity_resolver, get_token_provider
from showcase.schemas import (
    AuthUserSchema,
    ChangePasswordSchema,
    LoginSchema,
    ProfileSchema,
    ProfileUpdateSchema,
    RegisterSchema,
    SessionUserSchema,
    UsernameChangeSchema,
    UsernameSchema,
)
from showcase.services.auth.dto import LoginIn, PasswordChangeIn, RegisterIn
from showcase.services.auth.service import AuthService
from showcase.services.identity.dto import ProfileUpdateIn
from showcase.services.identity.service import IdentityService

bp = Blueprint("auth", __name__, url_prefix="/auth")

register_schema = RegisterSchema()
login_schema = LoginSchema()
change_password_schema = ChangePasswordSchema()
auth_user_schema = AuthUserSchema()
session_user_schema = SessionUserSchema()
profile_schema = ProfileSchema()
profile_update_schema = ProfileUpdateSchema()
username_schema = UsernameSchema()
username_change_schema = UsernameChangeSchema()


def _auth_service(*, with_limiter: bool = False) -> AuthService:
    return AuthService(
        token_provider=get_token_provider(),
        rate_limiter=get_rate_limiter() if with_limiter else None,
        ctx=service_context(),
    )


@bp.post("/register")
@timing
def register():
    """Create an account and start a session (rate-limited per client)."""

    service = _auth_service(with_limiter=True)
    service.enforce_register_rate(client_key())
    payload = register_schema.load(json_body())
    session = service.register(RegisterIn(**payload))
    response = json_response({"data": {"user": auth_user_schema.dump(session.user)}}, status=201)
    get_cookie_manager().set(response, session.token)
    return response


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and set the session cookie."""

    data = login_schema.load(json_body())
    session = _auth_service().login(LoginIn(email=data["email"], password=data["password"]))
    response = json_response({"data": {"user": auth_user_schema.dump(session.user)}})
    get_cookie_manager().set(response, session.token)
    return response


@bp.post("/logout")
@timing
def logout():
    response = json_response({"data": {"message": "Logged out"}})
    get_cookie_manager().clear(response)
    return response


@bp.get("/user")
@timing
def session_user():
    """Report whether the caller is signed in, from the token claims alone."""

    identity = get_identity_resolver().resolve()
    return json_response(
        {
            "data": {
                "authenticated": identity is not None,
                "user": session_user_schema.dump(identity) if identity else None,
            }
        }
    )


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    """Change the password and end the current session."""

    data = change_password_schema.load(json_body())
    _auth_service().change_password(
        PasswordChangeIn(
            current_password=data["current_password"], new_password=data["new_password"]
        )
    )
    response = json_response({"data": {"message": "Password changed. Please sign in again."}})
    get_cookie_manager().clear(response)
    return response


@bp.get("/profile")
@require_auth
@timing
def get_profile():
    profile = IdentityService(ctx=service_context()).get_profile()
    return json_response({"data": profile_schema.dump(profile)})


@bp.put("/profile")
@require_auth
@timing
def update_profile():
    data = profile_update_schema.load(json_body())
    service = IdentityService(ctx=service_context())
    profile = service.update_profile(ProfileUpdateIn(**data))
    return json_response({"data": profile_schema.dump(profile)})


@bp.put("/profile/username")
@require_auth
@timing
def change_username():
    data = username_schema.load(json_body())
    service = IdentityService(ctx=service_context())
    result = service.change_username(data["username"])
    return json_response({"data": username_change_schema.dump(result)})
