"""Buyer identity resolution with directory fallbacks."""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..clients import DirectoryService
from ..core import PLACEHOLDER, ResolvedBuyer
from .fields import first_of

logger = logging.getLogger(__name__)

# Accepted spellings on a raw buyer record
FIRST_NAME_PATHS = ("firstName", "name.first")
LAST_NAME_PATHS = ("lastName", "name.last")
EMAIL_PATHS = ("email", "emails.0.email", "emails.0")
CONTACT_ID_PATHS = ("contactId", "contact.contactId", "contactID")

# Shapes of a directory contact record
CONTACT_FIRST_NAME_PATHS = ("info.name.first", "name.first")
CONTACT_LAST_NAME_PATHS = ("info.name.last", "name.last")
CONTACT_EMAIL_PATHS = ("primaryEmail.email", "emails.0.email")

_SEPARATORS = re.compile(r"[._\-]+")


def title_case_words(text: str) -> str:
    """Uppercase the first letter of each word, keeping the rest as is."""
    words = text.split()
    return " ".join(word[0].upper() + word[1:] for word in words)


def name_from_email(email: str | None) -> str:
    """
    Derive a display name from an email's local part.

    ``"john.doe99@x.com"`` becomes ``"John Doe99"``.
    """
    local = str(email or "").split("@")[0]
    return title_case_words(_SEPARATORS.sub(" ", local)) or PLACEHOLDER


@dataclass
class _BuyerState:
    first: str = ""
    last: str = ""
    name: str = ""
    email: str = ""
    contact_id: str = ""

    @property
    def has_name(self) -> bool:
        return bool(self.first or self.last or self.name)

    @classmethod
    def from_record(cls, buyer: Mapping[str, Any]) -> "_BuyerState":
        name = buyer.get("name")
        return cls(
            first=_text(first_of(buyer, FIRST_NAME_PATHS)),
            last=_text(first_of(buyer, LAST_NAME_PATHS)),
            name=name if isinstance(name, str) else "",
            email=_text(first_of(buyer, EMAIL_PATHS)),
            contact_id=_text(first_of(buyer, CONTACT_ID_PATHS)),
        )

    def display_name(self) -> str:
        full = " ".join(part for part in (self.first, self.last) if part)
        if full:
            return full
        if self.name:
            return self.name
        return name_from_email(self.email) if self.email else PLACEHOLDER


class BuyerResolver:
    """
    Builds a displayable buyer from a loosely populated buyer record.

    Resolution runs in three steps, each skipped when its precondition
    does not hold:

    1. read names, email and contact id straight from the record
    2. look the email up in the directory (no name, email, no contact id)
    3. fetch the contact by id (no name or no email, contact id known)

    Directory failures are logged and resolution carries on with what is
    already known.
    """

    def __init__(self, directory: DirectoryService):
        self.directory = directory

    async def resolve(self, buyer: Any) -> ResolvedBuyer:
        state = _BuyerState.from_record(buyer if isinstance(buyer, Mapping) else {})

        for step in (self._lookup_by_email, self._lookup_by_contact_id):
            await step(state)

        return ResolvedBuyer(name=state.display_name(), email=state.email or PLACEHOLDER)

    async def _lookup_by_email(self, state: _BuyerState) -> None:
        if state.has_name or not state.email or state.contact_id:
            return

        try:
            result = await self.directory.query_by_email(state.email)
        except Exception as e:
            logger.warning("Directory lookup by email failed: %s", e)
            return

        items = (result or {}).get("items") or []
        if not items:
            logger.debug("No directory match for %s", state.email)
            return

        contact = items[0]
        state.first = _text(first_of(contact, CONTACT_FIRST_NAME_PATHS)) or state.first
        state.last = _text(first_of(contact, CONTACT_LAST_NAME_PATHS)) or state.last
        state.email = _text(first_of(contact, CONTACT_EMAIL_PATHS)) or state.email

    async def _lookup_by_contact_id(self, state: _BuyerState) -> None:
        if (state.has_name and state.email) or not state.contact_id:
            return

        try:
            contact = await self.directory.get_by_id(state.contact_id)
        except Exception as e:
            logger.warning("Directory fetch for contact %s failed: %s", state.contact_id, e)
            return

        contact = contact or {}
        state.first = state.first or _text(first_of(contact, CONTACT_FIRST_NAME_PATHS))
        state.last = state.last or _text(first_of(contact, CONTACT_LAST_NAME_PATHS))
        state.email = state.email or _text(first_of(contact, CONTACT_EMAIL_PATHS))


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
