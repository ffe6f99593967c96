from __future__ import annotations

import hmac
import logging
import re

from fastapi import HTTPException, status


log = logging.getLogger("bridal.services.access")

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

INVALID_CODE = "Invalid access code. Check your invite email and try again."
INVALID_EMAIL = "Please enter a valid email address."


class AccessService:
    """Check an invite against the single shared access code.

    There are no accounts: a matching code plus a plausible email is all the
    portal asks for. The normalized email keys the client-side profile.
    """

    def __init__(self, access_code: str):
        self.access_code = access_code

    def verify(self, *, email: str, code: str) -> str:
        submitted = (code or "").strip()
        if not self.access_code or not hmac.compare_digest(
            submitted.encode("utf-8"), self.access_code.encode("utf-8")
        ):
            log.info("Access denied: invalid code")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CODE)
        cleaned = (email or "").strip()
        if not _EMAIL_RE.match(cleaned):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_EMAIL)
        normalized = cleaned.lower()
        log.info("Access granted: email=%s", normalized)
        return normalized
