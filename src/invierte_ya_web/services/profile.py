"""Profile editing.

The ledger service exposes no profile update endpoint, so saving only
validates the contact fields and re-fetches the profile.
"""

from __future__ import annotations

from invierte_ya_web.domain.entities import User
from invierte_ya_web.domain.validation import validate_profile_contact
from invierte_ya_web.session.manager import SessionManager


async def save_profile(session: SessionManager, email: str, phone: str) -> User:
    validate_profile_contact(email, phone)
    return await session.refresh_profile()
