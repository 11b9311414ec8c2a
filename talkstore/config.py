"""Configuration constants and store settings."""

import functools
import os

from pydantic import BaseModel

from talkstore.exceptions import StoreConfigurationError

# Paging
PAGE_SIZE = 50
STATS_LIMIT = 1024

# Tables
TALKS_TABLE = "talks"
SPEAKERS_TABLE = "speakers"

# Aggregate views, refreshed by the store
SPEAKER_STATS_VIEW = "speaker_talk_stats"
TAG_STATS_VIEW = "tag_talk_stats"

# Store functions
SEARCH_TALKS_FUNCTION = "search_talks"

# Document identifiers are collection-prefixed
TALK_ID_PREFIX = "talks/"
SPEAKER_ID_PREFIX = "speakers/"

# Column lists for PostgREST selects. The speaker embed resolves the
# talks.speaker_id foreign key in the same request.
TALK_COLUMNS = "id, headline, description, speaker_id, event, published, tags"
SUMMARY_COLUMNS = "id, headline, speaker_id, tags, speaker:speakers(name)"
DETAIL_COLUMNS = (
    f"{TALK_COLUMNS}, "
    "speaker:speakers(id, name, talks(id, headline, speaker_id, tags))"
)
EDIT_COLUMNS = f"{TALK_COLUMNS}, version"

# Path of the nested talks embed inside DETAIL_COLUMNS
SPEAKER_TALKS_EMBED = "speaker.talks"

CONFLICT_MESSAGE = (
    "The talk was changed by someone else since you opened it. "
    "Refresh to load the latest version and apply your changes again."
)


class StoreSettings(BaseModel):
    """Connection settings for the Supabase project."""

    url: str
    key: str


@functools.lru_cache(maxsize=1)
def get_settings() -> StoreSettings:
    """Read store settings from the environment."""
    url = os.environ.get("SUPABASE_URL", "")
    key = os.environ.get("SUPABASE_SERVICE_KEY", "")
    missing = [name for name, value in (("SUPABASE_URL", url), ("SUPABASE_SERVICE_KEY", key)) if not value]
    if missing:
        raise StoreConfigurationError(missing)
    return StoreSettings(url=url, key=key)
