"""Talk repository backed by Supabase."""

import logging
from typing import AsyncContextManager, Callable, Optional

from supabase import AsyncClient

from talkstore.config import (
    CONFLICT_MESSAGE,
    DETAIL_COLUMNS,
    EDIT_COLUMNS,
    PAGE_SIZE,
    SEARCH_TALKS_FUNCTION,
    SPEAKER_ID_PREFIX,
    SPEAKER_STATS_VIEW,
    SPEAKER_TALKS_EMBED,
    SPEAKERS_TABLE,
    STATS_LIMIT,
    SUMMARY_COLUMNS,
    TAG_STATS_VIEW,
    TALKS_TABLE,
)
from talkstore.database.base import TalkService
from talkstore.database.client import open_session
from talkstore.exceptions import (
    ConcurrencyViolationError,
    TalkConflictError,
    TalkNotFoundError,
)
from talkstore.models import (
    NewTalk,
    Speaker,
    SpeakerTalkStats,
    TagTalkStats,
    Talk,
    TalkDetail,
    TalkSummary,
    UpdatedTalk,
)
from talkstore.utils import new_version, normalize_search_text, page_offset, page_range

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AsyncContextManager[AsyncClient]]


def _talk_from_row(row: dict) -> Talk:
    return Talk(
        id=row["id"],
        headline=row["headline"],
        description=row.get("description") or "",
        speaker=row["speaker_id"],
        event=row.get("event"),
        published=bool(row.get("published")),
        tags=row.get("tags") or [],
    )


def _summary_from_row(row: dict, speaker_name: Optional[str] = None) -> TalkSummary:
    """Build a summary from a talks row with an optional embedded speaker."""
    if speaker_name is None:
        speaker = row.get("speaker") or {}
        speaker_name = speaker.get("name")
    return TalkSummary(
        id=row["id"],
        headline=row["headline"],
        speaker=row["speaker_id"],
        speaker_name=speaker_name,
        tags=row.get("tags") or [],
    )


def _summary_from_search_row(row: dict) -> TalkSummary:
    return TalkSummary(
        id=row["id"],
        headline=row["headline"],
        speaker=row["speaker_id"],
        speaker_name=row.get("speaker_name"),
        tags=row.get("tags") or [],
    )


def _detail_from_row(row: dict) -> TalkDetail:
    """Merge a talk row and its embedded speaker into a detail view.

    The embedded speaker carries the speaker's talks; the current talk is
    left out of that list.
    """
    speaker = row.get("speaker") or {}
    speaker_name = speaker.get("name")
    other_talks = [t for t in speaker.get("talks") or [] if t["id"] != row["id"]]
    other_talks.sort(key=lambda t: t["id"])
    talk = _talk_from_row(row)
    return TalkDetail(
        **talk.model_dump(),
        speaker_name=speaker_name,
        speaker_talks=[_summary_from_row(t, speaker_name) for t in other_talks[:PAGE_SIZE]],
    )


def _editable_row(talk: UpdatedTalk) -> dict:
    return {
        "headline": talk.headline,
        "description": talk.description,
        "speaker_id": talk.speaker,
        "event": talk.event,
        "published": talk.published,
        "tags": talk.tags,
    }


class TalkRepository(TalkService):
    """Data access for talks and speakers.

    Every method runs in its own session obtained from ``session_factory``.
    Concurrent edits are arbitrated by the ``version`` column: reads hand
    out the current token and writes only land when it still matches.
    """

    def __init__(self, session_factory: Optional[SessionFactory] = None):
        self._session_factory = session_factory or open_session

    async def create_talk(self, new_talk: NewTalk) -> Talk:
        """Store a new talk and return it with its assigned id."""
        row = {
            "headline": new_talk.headline,
            "description": new_talk.description,
            "speaker_id": new_talk.speaker,
            "event": new_talk.event,
            "published": False,
            "tags": new_talk.tags,
            "version": new_version(),
        }
        async with self._session_factory() as session:
            result = await session.table(TALKS_TABLE).insert(row).execute()
        talk = _talk_from_row(result.data[0])
        logger.info("Created talk %s for speaker %s", talk.id, talk.speaker)
        return talk

    async def get_talk_detail(self, talk_id: str) -> TalkDetail:
        """Get a talk with its speaker and the speaker's other talks."""
        async with self._session_factory() as session:
            # One extra embedded row, since the talk itself is among its speaker's talks
            result = await (
                session.table(TALKS_TABLE)
                .select(DETAIL_COLUMNS)
                .eq("id", talk_id)
                .order("id", foreign_table=SPEAKER_TALKS_EMBED)
                .limit(PAGE_SIZE + 1, foreign_table=SPEAKER_TALKS_EMBED)
                .limit(1)
                .execute()
            )
        if not result.data:
            raise TalkNotFoundError(talk_id)
        return _detail_from_row(result.data[0])

    async def get_speakers(self) -> list[Speaker]:
        """List speakers by id, up to one page."""
        async with self._session_factory() as session:
            result = await (
                session.table(SPEAKERS_TABLE)
                .select("id, name")
                .like("id", f"{SPEAKER_ID_PREFIX}%")
                .order("id")
                .range(0, PAGE_SIZE - 1)
                .execute()
            )
        return [Speaker(**row) for row in result.data or []]

    async def update_talk(self, talk_id: str, talk: UpdatedTalk, version: str) -> Talk:
        """Overwrite a talk's mutable fields if the version token is still current."""
        try:
            async with self._session_factory() as session:
                current = await session.table(TALKS_TABLE).select("id, version").eq("id", talk_id).limit(1).execute()
                if not current.data:
                    raise TalkNotFoundError(talk_id)

                stored_version = current.data[0]["version"]
                if stored_version != version:
                    raise ConcurrencyViolationError(talk_id, version, stored_version)

                values = _editable_row(talk)
                values["version"] = new_version()
                result = await (
                    session.table(TALKS_TABLE)
                    .update(values)
                    .eq("id", talk_id)
                    .eq("version", version)
                    .execute()
                )
                if not result.data:
                    # Changed between the read and the conditional write
                    raise ConcurrencyViolationError(talk_id, version)
        except ConcurrencyViolationError as e:
            logger.warning("Rejected stale update of %s: %s", talk_id, e.message)
            raise TalkConflictError(talk_id, CONFLICT_MESSAGE) from e

        logger.info("Updated talk %s", talk_id)
        return _talk_from_row(result.data[0])

    async def delete_talk(self, talk_id: str) -> bool:
        """Delete a talk. Returns False when there was nothing to delete."""
        async with self._session_factory() as session:
            result = await session.table(TALKS_TABLE).delete().eq("id", talk_id).execute()
        deleted = bool(result.data)
        logger.info("Delete talk %s: %s", talk_id, "removed" if deleted else "nothing to remove")
        return deleted

    async def get_speaker_talk_stats(self) -> list[SpeakerTalkStats]:
        """Talk counts per speaker, busiest first."""
        async with self._session_factory() as session:
            result = await (
                session.table(SPEAKER_STATS_VIEW)
                .select("speaker_id, speaker_name, talk_count")
                .order("talk_count", desc=True)
                .limit(STATS_LIMIT)
                .execute()
            )
        return [
            SpeakerTalkStats(
                speaker=row["speaker_id"],
                speaker_name=row.get("speaker_name"),
                talk_count=row["talk_count"],
            )
            for row in result.data or []
        ]

    async def get_tag_talk_stats(self) -> list[TagTalkStats]:
        """Talk counts per tag, most used first."""
        async with self._session_factory() as session:
            result = await (
                session.table(TAG_STATS_VIEW)
                .select("tag, talk_count")
                .order("talk_count", desc=True)
                .limit(STATS_LIMIT)
                .execute()
            )
        return [TagTalkStats(**row) for row in result.data or []]

    async def get_talk_for_editing(self, talk_id: str) -> tuple[UpdatedTalk, str]:
        """Get a talk's editable fields and its current version token."""
        async with self._session_factory() as session:
            result = await session.table(TALKS_TABLE).select(EDIT_COLUMNS).eq("id", talk_id).limit(1).execute()
        if not result.data:
            raise TalkNotFoundError(talk_id)

        row = result.data[0]
        talk = _talk_from_row(row)
        editable = UpdatedTalk(**talk.model_dump(exclude={"id"}))
        return editable, row["version"]

    async def get_talk_summaries(self, page: int = 1) -> list[TalkSummary]:
        """List one page of talks with speaker names."""
        start, end = page_range(page)
        async with self._session_factory() as session:
            result = await session.table(TALKS_TABLE).select(SUMMARY_COLUMNS).order("id").range(start, end).execute()
        return [_summary_from_row(row) for row in result.data or []]

    async def get_talks_by_speaker(self, speaker: str, page: int = 1) -> list[TalkSummary]:
        """List one page of a speaker's talks."""
        start, end = page_range(page)
        async with self._session_factory() as session:
            result = await (
                session.table(TALKS_TABLE)
                .select(SUMMARY_COLUMNS)
                .eq("speaker_id", speaker)
                .order("id")
                .range(start, end)
                .execute()
            )
        return [_summary_from_row(row) for row in result.data or []]

    async def get_talks_by_tag(self, tag: str, page: int = 1) -> list[TalkSummary]:
        """List one page of talks carrying a tag."""
        start, end = page_range(page)
        async with self._session_factory() as session:
            result = await (
                session.table(TALKS_TABLE)
                .select(SUMMARY_COLUMNS)
                .contains("tags", [tag])
                .order("id")
                .range(start, end)
                .execute()
            )
        return [_summary_from_row(row) for row in result.data or []]

    async def search_talks(self, text: str, page: int = 1) -> list[TalkSummary]:
        """Full-text search over headline and description.

        Ranking happens in the store's ``search_talks`` function, which
        weights headline matches above description matches. Blank input
        lists all talks instead.
        """
        query = normalize_search_text(text)
        if not query:
            return await self.get_talk_summaries(page)

        params = {
            "search_text": query,
            "result_offset": page_offset(page),
            "result_limit": PAGE_SIZE,
        }
        async with self._session_factory() as session:
            result = await session.rpc(SEARCH_TALKS_FUNCTION, params).execute()
        logger.debug("Search %r page %d returned %d talks", query, page, len(result.data or []))
        return [_summary_from_search_row(row) for row in result.data or []]
