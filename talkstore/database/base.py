"""Abstract talk service contract."""

from abc import ABC, abstractmethod

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


class TalkService(ABC):
    """Operations on the talk catalogue. Pages are 1-based."""

    @abstractmethod
    async def create_talk(self, new_talk: NewTalk) -> Talk:
        ...

    @abstractmethod
    async def get_talk_detail(self, talk_id: str) -> TalkDetail:
        ...

    @abstractmethod
    async def get_speakers(self) -> list[Speaker]:
        ...

    @abstractmethod
    async def update_talk(self, talk_id: str, talk: UpdatedTalk, version: str) -> Talk:
        ...

    @abstractmethod
    async def delete_talk(self, talk_id: str) -> bool:
        ...

    @abstractmethod
    async def get_speaker_talk_stats(self) -> list[SpeakerTalkStats]:
        ...

    @abstractmethod
    async def get_tag_talk_stats(self) -> list[TagTalkStats]:
        ...

    @abstractmethod
    async def get_talk_for_editing(self, talk_id: str) -> tuple[UpdatedTalk, str]:
        ...

    @abstractmethod
    async def get_talk_summaries(self, page: int = 1) -> list[TalkSummary]:
        ...

    @abstractmethod
    async def get_talks_by_speaker(self, speaker: str, page: int = 1) -> list[TalkSummary]:
        ...

    @abstractmethod
    async def get_talks_by_tag(self, tag: str, page: int = 1) -> list[TalkSummary]:
        ...

    @abstractmethod
    async def search_talks(self, text: str, page: int = 1) -> list[TalkSummary]:
        ...
