import pytest

from dst_cli.core.fetcher import ARCHIVE_URL, DstFetcher
from dst_cli.exceptions import InvalidRangeError, TransportError

from .conftest import RecordingFetch

FORMAT_QUERY = (
    "Image+Type=GIF&COLOR=COLOR&AE+Sensitivity=0&Dst+Sensitivity=0"
    "&Output=DST&Out+format=WDC"
)


def make_fetcher(fetch, current_year: int = 2024, **kwargs) -> DstFetcher:
    return DstFetcher(fetch, current_year=lambda: current_year, **kwargs)


class TestValidation:
    async def test_start_year_before_1957(self, recording_fetch):
        fetcher = make_fetcher(recording_fetch)

        with pytest.raises(InvalidRangeError, match="1900") as exc_info:
            await fetcher.fetch_range(1900, 2024)

        assert exc_info.value.year == 1900
        assert recording_fetch.urls == []

    async def test_end_year_after_current_year(self, recording_fetch):
        fetcher = make_fetcher(recording_fetch, current_year=2024)

        with pytest.raises(InvalidRangeError, match="2025") as exc_info:
            await fetcher.fetch_range(1957, 2025)

        assert exc_info.value.year == 2025
        assert recording_fetch.urls == []

    async def test_reversed_range(self, recording_fetch):
        fetcher = make_fetcher(recording_fetch)

        with pytest.raises(InvalidRangeError, match="after"):
            await fetcher.fetch_range(2010, 2000)

    async def test_current_year_is_allowed(self, recording_fetch):
        fetcher = make_fetcher(recording_fetch, current_year=2024)

        assert await fetcher.fetch_range(2024, 2024) == b"<1>"

    def test_rejects_non_positive_period(self, recording_fetch):
        with pytest.raises(ValueError):
            make_fetcher(recording_fetch, period=0)


class TestBuildUrl:
    def test_fields_keep_archive_order(self, recording_fetch):
        fetcher = make_fetcher(recording_fetch)
        interval = fetcher.plan(1957, 1981)[0]

        assert fetcher.build_url(interval) == (
            f"{ARCHIVE_URL}?SCent=19&STens=50&SYear=7&SMonth=1"
            f"&ECent=19&ETens=80&EYear=1&EMonth=12&{FORMAT_QUERY}"
        )

    def test_uses_configured_base_url(self, recording_fetch):
        fetcher = make_fetcher(recording_fetch, base_url="http://localhost:8080/dst")
        interval = fetcher.plan(2000, 2000)[0]

        assert fetcher.build_url(interval).startswith(
            "http://localhost:8080/dst?SCent=20&STens=0&SYear=0&SMonth=1&"
        )


class TestFetchRange:
    async def test_requests_each_interval_in_order(self, recording_fetch):
        fetcher = make_fetcher(recording_fetch)

        data = await fetcher.fetch_range(1957, 2024)

        assert data == b"<1><2><3>"
        assert len(recording_fetch.urls) == 3
        assert "SCent=19&STens=50&SYear=7" in recording_fetch.urls[0]
        assert "ECent=19&ETens=80&EYear=1" in recording_fetch.urls[0]
        assert "SCent=19&STens=80&SYear=2" in recording_fetch.urls[1]
        assert "ECent=20&ETens=0&EYear=6" in recording_fetch.urls[1]
        assert "SCent=20&STens=0&SYear=7" in recording_fetch.urls[2]
        assert "ECent=20&ETens=20&EYear=4" in recording_fetch.urls[2]

    async def test_single_year_issues_one_request(self, recording_fetch):
        fetcher = make_fetcher(recording_fetch)

        assert await fetcher.fetch_range(2000, 2000) == b"<1>"
        assert len(recording_fetch.urls) == 1

    async def test_failure_on_second_of_three_discards_everything(self):
        error = TransportError("HTTP 503", status=503)
        fetch = RecordingFetch(fail_on=2, error=error)
        fetcher = make_fetcher(fetch)

        with pytest.raises(TransportError) as exc_info:
            await fetcher.fetch_range(1957, 2024)

        assert exc_info.value is error
        assert len(fetch.urls) == 2

    async def test_collaborator_errors_propagate_unchanged(self):
        error = OSError("network unreachable")
        fetcher = make_fetcher(RecordingFetch(fail_on=1, error=error))

        with pytest.raises(OSError) as exc_info:
            await fetcher.fetch_range(1990, 2000)

        assert exc_info.value is error

    async def test_smaller_period_means_more_requests(self, recording_fetch):
        fetcher = make_fetcher(recording_fetch, period=10)

        await fetcher.fetch_range(1957, 2006)

        assert len(recording_fetch.urls) == 5


class TestFetchAll:
    async def test_covers_1957_to_current_year(self, recording_fetch):
        fetcher = make_fetcher(recording_fetch, current_year=2031)

        data = await fetcher.fetch_all()

        assert data == b"<1><2><3>"
        assert "ECent=20&ETens=30&EYear=1&EMonth=12" in recording_fetch.urls[-1]

    def test_plan_matches_fetch_all_range(self, recording_fetch):
        fetcher = make_fetcher(recording_fetch, current_year=2024)

        plan = fetcher.plan(1957, fetcher.current_year())

        assert [(i.start_year, i.end_year) for i in plan] == [
            (1957, 1981),
            (1982, 2006),
            (2007, 2024),
        ]
