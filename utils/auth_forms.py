import logging
import re
from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from utils.notifications import NotificationQueue
from utils.session import SessionStore
from utils.supabase_handler import SupabaseError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_PASSWORD_LENGTH = 8


def _check_email(value: str) -> str:
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email")
    return value


class SignInForm(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def valid_email(cls, value):
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def password_present(cls, value):
        if not value:
            raise ValueError("Password is required")
        return value


class SignUpForm(BaseModel):
    email: str
    password: str
    confirm_password: str

    @field_validator("email")
    @classmethod
    def valid_email(cls, value):
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def long_enough(cls, value):
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        return value

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


def first_error(error: ValidationError) -> str:
    """Human readable message of the first failed check"""
    message = error.errors()[0]["msg"]
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")


def submit_sign_in(
    store: SessionStore, notifier: NotificationQueue, email: str, password: str
) -> Optional[str]:
    """
    Validate and submit the sign-in form.

    Navigation is not done here: a successful sign-in changes the session and
    the router redirects on the next render.

    Returns:
        Optional[str]: Validation message to show inline, None otherwise
    """
    try:
        form = SignInForm(email=email, password=password)
    except ValidationError as e:
        return first_error(e)

    try:
        store.sign_in(form.email, form.password)
    except SupabaseError as e:
        logger.error(f"Sign in failed: {e.message}")
        notifier.error(e.message or "Failed to sign in")
    return None


def submit_sign_up(
    store: SessionStore,
    notifier: NotificationQueue,
    email: str,
    password: str,
    confirm_password: str,
) -> Optional[str]:
    """
    Validate and submit the sign-up form. No backend call is made when
    validation fails.

    Returns:
        Optional[str]: Validation message to show inline, None otherwise
    """
    try:
        form = SignUpForm(email=email, password=password, confirm_password=confirm_password)
    except ValidationError as e:
        return first_error(e)

    try:
        store.sign_up(form.email, form.password)
    except SupabaseError as e:
        logger.error(f"Sign up failed: {e.message}")
        notifier.error(e.message or "Failed to sign up")
        return None

    notifier.success("Signup successful! Please check your email to confirm your account.")
    return None
