# Talkstore - conference talk catalogue data access
#
# Modules:
#   - config: Configuration constants and store settings
#   - models: Transfer objects (talks, speakers, summaries, stats)
#   - exceptions: Error hierarchy (not found, conflict)
#   - utils: Pagination and version token helpers
#   - database: Session factory, service interface and talk repository

from talkstore.database import TalkRepository, TalkService, open_session
from talkstore.exceptions import (
    ConcurrencyViolationError,
    StoreConfigurationError,
    TalkConflictError,
    TalkNotFoundError,
    TalkStoreError,
)

__all__ = [
    "TalkRepository",
    "TalkService",
    "open_session",
    "TalkStoreError",
    "TalkNotFoundError",
    "TalkConflictError",
    "ConcurrencyViolationError",
    "StoreConfigurationError",
]
