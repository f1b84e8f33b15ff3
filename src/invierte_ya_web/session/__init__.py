"""Session ownership: the persisted bearer token and the in-memory profile.

The manager lives in ``invierte_ya_web.session.manager``; it is not
re-exported here because the API client imports the token stores from this
package.
"""

from invierte_ya_web.session.store import (
    MappingTokenStore,
    MemoryTokenStore,
    TokenStore,
)

__all__ = ["MappingTokenStore", "MemoryTokenStore", "TokenStore"]
