"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

USERNAME_REGEX = r"^[a-z0-9_-]{3,16}$"
USERNAME_MESSAGE = (
    "Username must be 3-16 characters of lowercase letters, digits, '-' or '_'."
)


class RegisterSchema(Schema):
    """Input payload for account registration."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    username = fields.String(
        load_default=None,
        allow_none=True,
        validate=validate.Regexp(USERNAME_REGEX, error=USERNAME_MESSAGE),
    )
    first_name = fields.String(
        load_default=None, allow_none=True, data_key="firstName", validate=validate.Length(max=100)
    )
    last_name = fields.String(
        load_default=None, allow_none=True, data_key="lastName", validate=validate.Length(max=100)
    )


class LoginSchema(Schema):
    """Input payload for authenticating a user.

    No format rules beyond presence: malformed credentials fail as a plain
    401 like any other mismatch.
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class ChangePasswordSchema(Schema):
    """Input payload for changing the caller's password."""

    class Meta:
        unknown = EXCLUDE

    current_password = fields.String(
        required=True, data_key="currentPassword", validate=validate.Length(min=1)
    )
    new_password = fields.String(
        required=True, data_key="newPassword", validate=validate.Length(min=8, max=128)
    )


class AuthUserSchema(Schema):
    """Identity view returned by register/login."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    username = fields.String(allow_none=True)
    first_name = fields.String(allow_none=True, data_key="firstName")
    last_name = fields.String(allow_none=True, data_key="lastName")
    role = fields.String(required=True)
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")


class SessionUserSchema(Schema):
    """Identity read from the session token claims (``/auth/user``)."""

    id = fields.Function(lambda c: c.user_id)
    email = fields.String()
    role = fields.String()
    username = fields.String(allow_none=True)
    first_name = fields.String(allow_none=True, data_key="firstName")
    last_name = fields.String(allow_none=True, data_key="lastName")
