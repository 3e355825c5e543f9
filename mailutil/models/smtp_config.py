"""SMTP credentials model and port constants.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class SmtpPort(IntEnum):
    """Well-known SMTP ports.

    Attributes:
        PLAIN: Unencrypted SMTP.
        IMPLICIT_TLS: TLS from the first byte (SMTPS).
        STARTTLS: Plain connection upgraded with STARTTLS (submission).
    """

    PLAIN = 25
    IMPLICIT_TLS = 465
    STARTTLS = 587


class Credentials(BaseModel):
    """SMTP login credentials.

    Only built when both user and password are known. The password is a
    ``SecretStr`` so it never shows up in reprs or log lines.

    Attributes:
        user: SMTP authentication username.
        password: SMTP authentication password.
    """

    model_config = ConfigDict(frozen=True)

    user: str = Field(..., min_length=1, description="SMTP authentication username")
    password: SecretStr = Field(..., description="SMTP authentication password")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: SecretStr) -> SecretStr:
        """Validate password is not empty.

        Raises:
            ValueError: If password is empty.
        """
        if not v.get_secret_value():
            raise ValueError("SMTP password cannot be empty")
        return v

    def password_value(self) -> str:
        """Return the raw password for the transport login."""
        return self.password.get_secret_value()
