import pytest


class RecordingFetch:
    """Stands in for ArchiveClient.fetch, answering each call with a numbered body."""

    def __init__(self, fail_on: int | None = None, error: Exception | None = None):
        self.urls: list[str] = []
        self.fail_on = fail_on
        self.error = error or RuntimeError("connection reset")

    async def __call__(self, url: str) -> bytes:
        self.urls.append(url)
        if self.fail_on == len(self.urls):
            raise self.error
        return f"<{len(self.urls)}>".encode()


@pytest.fixture
def recording_fetch() -> RecordingFetch:
    return RecordingFetch()
