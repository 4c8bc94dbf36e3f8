"""Sign-in request - what the reader asked the sign-in prompt to do."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SignInMode(Enum):
    PASSWORD = "password"
    REGISTER = "register"
    FEDERATED = "federated"


@dataclass(frozen=True)
class SignInRequest:
    """Credentials collected by the sign-in prompt.

    Attributes:
        mode: How the session should be established.
        email: Login email (password and register modes).
        password: Password (password and register modes).
        display_name: Name for a new account (register mode).
        provider_token: Third-party identity token (federated mode).
    """

    mode: SignInMode
    email: str = ""
    password: str = ""
    display_name: str = ""
    provider_token: Optional[str] = None
