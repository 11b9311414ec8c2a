# Database layer - Supabase sessions and the talk repository

from talkstore.database.client import open_session

from talkstore.database.base import TalkService

from talkstore.database.talks import TalkRepository

__all__ = [
    # Sessions
    "open_session",
    # Contract
    "TalkService",
    # Repository
    "TalkRepository",
]
