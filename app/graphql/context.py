"""
GraphQL request context.

The transport contributes exactly one thing, the caller's credential
token; everything else (store, loaders, memoised grants) is built here.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends
from strawberry.fastapi import BaseContext

from app.api.v1.deps import get_credential_token, get_store
from app.core.policy import Principal, authorize
from app.db.store import DocumentStore
from app.graphql.loaders import Loaders


class GraphContext(BaseContext):
    def __init__(self, store: DocumentStore, credential_token: Optional[str] = None) -> None:
        super().__init__()
        self.store = store
        self.credential_token = credential_token
        self.loaders = Loaders.for_store(store)
        self._grants: dict[tuple[str, Optional[str]], Optional[Principal]] = {}

    def authorize(self, operation: str, webtoken: Optional[str] = None) -> Optional[Principal]:
        """Run the access policy for *operation*, memoised per request.

        An explicit ``webtoken`` argument wins over the transport credential.
        """
        token = webtoken or self.credential_token
        key = (operation, token)
        if key not in self._grants:
            self._grants[key] = authorize(operation, token)
        return self._grants[key]


async def get_context(
    store: DocumentStore = Depends(get_store),
    credential_token: Optional[str] = Depends(get_credential_token),
) -> GraphContext:
    return GraphContext(store, credential_token)
