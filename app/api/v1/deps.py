"""
FastAPI dependencies: persistence store and caller credential.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Cookie, Depends
from fastapi.security import OAuth2PasswordBearer

from app.db.session import async_session_factory
from app.db.store import DocumentStore, SqlDocumentStore

# auto_error=False: anonymous callers are allowed through, the access
# policy decides per operation
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/graphql", auto_error=False)

_store = SqlDocumentStore(async_session_factory)


# ── Persistence ─────────────────────────────────────────────────────
async def get_store() -> DocumentStore:
    return _store


# ── Credential ──────────────────────────────────────────────────────
async def get_credential_token(
    token: Optional[str] = Depends(oauth2_scheme),
    access_token: Optional[str] = Cookie(default=None),
) -> Optional[str]:
    """Bearer token from the Authorization header, else the access cookie."""
    # Priority: Header > Cookie
    if token:
        return token
    if access_token:
        if access_token.startswith("Bearer "):
            return access_token.split(" ", 1)[1]
        return access_token
    return None
