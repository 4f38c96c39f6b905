"""Caption retrieval through youtube-transcript-api."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from youtube_transcript_api import CouldNotRetrieveTranscript, YouTubeTranscriptApi

from common.models import TranscriptSegment
from common.pacing import Pacer

logger = logging.getLogger(__name__)


class TranscriptFetcher:
    """Fetch a video's captions as ordered segments.

    ``fetch`` returns None when the video simply has no usable captions
    (disabled, none in the requested languages, private or removed). That is
    an expected outcome, not an error. Anything else, such as network failures,
    propagates to the caller.
    """

    def __init__(
        self,
        api: Optional[YouTubeTranscriptApi] = None,
        pacer: Optional[Pacer] = None,
        languages: Sequence[str] = ("en",),
    ):
        self.api = api or YouTubeTranscriptApi()
        self.pacer = pacer
        self.languages = list(languages)

    def fetch(self, video_id: str) -> Optional[list[TranscriptSegment]]:
        if self.pacer is not None:
            self.pacer.wait()

        try:
            fetched = self.api.fetch(video_id, languages=self.languages)
        except CouldNotRetrieveTranscript as e:
            logger.debug("No transcript for %s: %s", video_id, e)
            return None

        segments = [
            TranscriptSegment(text=snippet.text, start=snippet.start, duration=snippet.duration)
            for snippet in fetched
        ]
        return segments or None
