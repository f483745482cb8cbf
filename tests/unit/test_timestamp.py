"""Tests for timecode, duration and video ID parsing."""
import pytest

from talkalong.youtube.timestamp import (
    parse_vtt_timecode,
    parse_iso8601_duration,
    format_prompt_timestamp,
    extract_video_id,
    resolve_video_id,
)


@pytest.mark.unit
class TestParseVttTimecode:
    def test_minutes_and_millis(self):
        assert parse_vtt_timecode("00:01:02.500") == 62.5

    def test_hours(self):
        assert parse_vtt_timecode("01:00:00.000") == 3600.0

    def test_all_components(self):
        assert parse_vtt_timecode("02:03:04.005") == pytest.approx(7384.005)

    def test_zero(self):
        assert parse_vtt_timecode("00:00:00.000") == 0.0

    def test_finds_timecode_inside_text(self):
        assert parse_vtt_timecode("start 00:00:10.250 ") == 10.25

    def test_missing_millis_returns_none(self):
        assert parse_vtt_timecode("00:01:02") is None

    def test_short_form_returns_none(self):
        assert parse_vtt_timecode("01:02.500") is None

    def test_garbage_returns_none(self):
        assert parse_vtt_timecode("not a time") is None

    def test_empty_returns_none(self):
        assert parse_vtt_timecode("") is None

    def test_none_returns_none(self):
        assert parse_vtt_timecode(None) is None


@pytest.mark.unit
class TestParseIso8601Duration:
    def test_full_duration(self):
        assert parse_iso8601_duration("PT1H2M3S") == 3723

    def test_seconds_only(self):
        assert parse_iso8601_duration("PT5S") == 5

    def test_minutes_only(self):
        assert parse_iso8601_duration("PT45M") == 2700

    def test_hours_and_seconds(self):
        assert parse_iso8601_duration("PT1H15S") == 3615

    def test_typical_episode_length(self):
        assert parse_iso8601_duration("PT12M30S") == 750

    def test_garbage_returns_zero(self):
        assert parse_iso8601_duration("garbage") == 0

    def test_bare_prefix_returns_zero(self):
        assert parse_iso8601_duration("PT") == 0

    def test_empty_returns_zero(self):
        assert parse_iso8601_duration("") == 0

    def test_none_returns_zero(self):
        assert parse_iso8601_duration(None) == 0

    def test_returns_int(self):
        assert isinstance(parse_iso8601_duration("PT10M"), int)


@pytest.mark.unit
class TestFormatPromptTimestamp:
    def test_zero(self):
        assert format_prompt_timestamp(0) == "00:00"

    def test_pads_components(self):
        assert format_prompt_timestamp(65) == "01:05"

    def test_truncates_fraction(self):
        assert format_prompt_timestamp(59.9) == "00:59"

    def test_minutes_past_an_hour(self):
        assert format_prompt_timestamp(3725) == "62:05"

    def test_negative_clamps_to_zero(self):
        assert format_prompt_timestamp(-3) == "00:00"


@pytest.mark.unit
class TestExtractVideoId:
    def test_watch_url(self):
        assert extract_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_watch_url_with_extra_params(self):
        url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=123"
        assert extract_video_id(url) == "dQw4w9WgXcQ"

    def test_short_url(self):
        assert extract_video_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_embed_url(self):
        assert extract_video_id("https://www.youtube.com/embed/dQw4w9WgXcQ?start=60") == "dQw4w9WgXcQ"

    def test_shorts_url(self):
        assert extract_video_id("https://www.youtube.com/shorts/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_mobile_url(self):
        assert extract_video_id("https://m.youtube.com/watch?v=dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_empty_string(self):
        assert extract_video_id("") is None

    def test_non_youtube_url(self):
        assert extract_video_id("https://vimeo.com/123456") is None


@pytest.mark.unit
class TestResolveVideoId:
    def test_bare_id(self):
        assert resolve_video_id("dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_bare_id_with_whitespace(self):
        assert resolve_video_id("  dQw4w9WgXcQ \n") == "dQw4w9WgXcQ"

    def test_id_with_dash_and_underscore(self):
        assert resolve_video_id("a-b_c-d_e-f") == "a-b_c-d_e-f"

    def test_url(self):
        assert resolve_video_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_wrong_length(self):
        assert resolve_video_id("abc") is None

    def test_invalid_characters(self):
        assert resolve_video_id("abc def ghi") is None

    def test_none(self):
        assert resolve_video_id(None) is None

    def test_non_string(self):
        assert resolve_video_id(12345678901) is None
