"""Email address model and parsing.

Defines the ``Address`` value type and the functions that turn raw address
strings (single or comma-separated) and the other accepted input shapes into
lists of ``Address``.

Parsing follows the RFC 5322 address-list grammar via
``email.utils.getaddresses``, so quoted display names may contain commas.
Strict mode additionally validates every address with ``email-validator``.

Author: Odiseo
Created: 2025-11-02
Version: 1.0.0
"""

from __future__ import annotations

from collections.abc import Sequence
from email.utils import formataddr, getaddresses
from typing import Union

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

from mailutil.core.exceptions import AddressParseError


class Address(BaseModel):
    """Parsed email address.

    Attributes:
        email: Address part (``user@domain``).
        display_name: Optional human readable name.
        text_encoding: Charset used when a non-ASCII display name is
            written into a header.
    """

    model_config = ConfigDict(frozen=True)

    email: str = Field(..., min_length=1, description="Address part")
    display_name: str | None = Field(default=None, description="Display name")
    text_encoding: str = Field(default="utf-8", description="Display name charset")

    @field_validator("email")
    @classmethod
    def validate_email_not_blank(cls, v: str) -> str:
        """Trim the address and reject blank values.

        Raises:
            ValueError: If address is empty or whitespace.
        """
        if not v.strip():
            raise ValueError("Address email cannot be empty")
        return v.strip()

    def formatted(self) -> str:
        """Return the header form, e.g. ``Jane Doe <jane@example.com>``."""
        return formataddr((self.display_name or "", self.email), charset=self.text_encoding)

    def validate_syntax(self) -> Address:
        """Validate the address syntax.

        Returns:
            This address, unchanged.

        Raises:
            AddressParseError: If the address is not syntactically valid.
        """
        try:
            validate_email(self.email, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError as e:
            raise AddressParseError(f"Invalid address '{self.email}': {e}") from e
        return self

    def __str__(self) -> str:
        return self.formatted()


AddressInput = Union[str, Address, Sequence[Address], Sequence[str], None]


def _check(addresses: list[Address], strict: bool) -> list[Address]:
    if strict:
        for address in addresses:
            address.validate_syntax()
    return addresses


def parse_comma_separated(raw: str, strict: bool = True) -> list[Address]:
    """Parse a comma-separated address list.

    Args:
        raw: Header-style list, e.g. ``"a@x.com, Bee <b@x.com>"``.
        strict: Validate every address when True.

    Returns:
        Parsed addresses in input order; empty for blank input.

    Raises:
        AddressParseError: In strict mode, if any entry is not a valid address.
    """
    if not raw or not raw.strip():
        return []

    addresses: list[Address] = []
    for name, email in getaddresses([raw]):
        email = email.strip()
        if not email:
            if strict:
                raise AddressParseError(f"Could not parse an address from '{raw}'")
            continue
        addresses.append(Address(email=email, display_name=name.strip() or None))

    return _check(addresses, strict)


def parse_single(raw: str, strict: bool = True) -> Address:
    """Parse exactly one address.

    Raises:
        AddressParseError: If the input holds zero or several addresses, or
            (strict mode) the address is invalid.
    """
    addresses = parse_comma_separated(raw, strict)
    if not addresses:
        raise AddressParseError("Expected to parse one valid SMTP address, none found.")
    if len(addresses) > 1:
        raise AddressParseError(
            f"Expected to parse one valid SMTP address, {len(addresses)} found."
        )
    return addresses[0]


def _from_string(value: str, strict: bool) -> list[Address]:
    if not value:
        return []
    return parse_comma_separated(value, strict)


def _from_address(value: Address, strict: bool) -> list[Address]:
    return _check([value], strict)


def _from_sequence(values: Sequence[Address | str], strict: bool) -> list[Address]:
    addresses: list[Address] = []
    for item in values:
        if isinstance(item, Address):
            addresses.extend(_from_address(item, strict))
        elif isinstance(item, str):
            addresses.extend(parse_comma_separated(item, strict))
        else:
            raise TypeError(f"Unsupported address entry type: {type(item).__name__}")
    return addresses


def to_addresses(value: AddressInput, strict: bool = True) -> list[Address]:
    """Normalise any accepted address input into a list of ``Address``.

    Accepted inputs: ``None``, a raw string (possibly comma-separated), a
    single ``Address``, or a sequence of ``Address`` and/or raw strings.

    Raises:
        AddressParseError: In strict mode, if an address is invalid.
        TypeError: For any other input type.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return _from_string(value, strict)
    if isinstance(value, Address):
        return _from_address(value, strict)
    if isinstance(value, Sequence):
        return _from_sequence(value, strict)
    raise TypeError(f"Unsupported address input type: {type(value).__name__}")
