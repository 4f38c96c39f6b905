"""Error taxonomy shared by all pipeline stages."""


class FatalStageError(Exception):
    """A condition that invalidates the whole stage run.

    Raised before or during catalog enumeration. The stage runner never
    contains these; they propagate to the CLI, which exits non-zero.
    """


class MissingConfigError(FatalStageError):
    """Required configuration (env var or config file entry) is absent."""


class ChannelNotFoundError(FatalStageError):
    """The channel id did not resolve to an uploads playlist."""

    def __init__(self, channel_id: str):
        super().__init__(f"Channel not found: {channel_id}")
        self.channel_id = channel_id


class MissingCredentialsError(FatalStageError):
    """No stored OAuth token or client secrets for the publish stage."""


class YouTubeApiError(Exception):
    """Non-2xx response from the YouTube Data API."""

    def __init__(self, status_code: int, error: dict | str | None = None):
        super().__init__(f"YouTube API Error ({status_code}): {error}")
        self.status_code = status_code
        self.error = error
