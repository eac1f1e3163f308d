#!/usr/bin/env python3
"""
Tests for the SRT and WebVTT handlers.

Focus on blank line handling inside cues, timings kept in comments and
the warnings emitted when non-subtitle data is written as subtitles.
"""

import pytest

from localekit.errors import FormatError
from localekit.format_handlers.srt import SrtHandler, default_timing, format_timestamp
from localekit.format_handlers.vtt import VttHandler
from localekit.models import LocalizationEntry, LocalizationFile

SRT_CONTENT = """1
00:00:00,160 --> 00:00:05,120
First subtitle text
can be multi-line

2
00:00:05,200 --> 00:00:10,779
Roses are red

Violets are blue

3
00:00:11,000 --> 00:00:12,000

"""

VTT_CONTENT = """WEBVTT - demo

NOTE this is ignored

welcome
00:00:00.000 --> 00:00:02.000 align:center
Hello there

00:00:02.500 --> 00:00:04.000
Second cue


00:00:05.000 --> 00:00:06.000
Third cue
"""


@pytest.fixture
def srt():
    return SrtHandler()


@pytest.fixture
def vtt():
    return VttHandler()


def test_format_timestamp():
    assert format_timestamp(3_723_004) == "01:02:03,004"
    assert format_timestamp(0, ".") == "00:00:00.000"
    assert default_timing(1) == "00:00:02,000 --> 00:00:04,000"


def test_srt_parse(srt):
    file = srt.parse_content(SRT_CONTENT, "movie.tr.srt")
    assert file.culture == "tr"
    assert file.keys == ["1", "2", "3"]
    assert file.get_value("1") == "First subtitle text\ncan be multi-line"
    assert file.entries_by_key["1"].comment == "00:00:00,160 --> 00:00:05,120"


def test_srt_blank_line_inside_cue_is_kept(srt):
    file = srt.parse_content(SRT_CONTENT)
    assert file.get_value("2") == "Roses are red\n\nViolets are blue"


def test_srt_empty_cue(srt):
    assert srt.parse_content(SRT_CONTENT).get_value("3") == ""


def test_srt_crlf(srt):
    file = srt.parse_content(SRT_CONTENT.replace("\n", "\r\n"))
    assert file.count == 3


def test_srt_invalid(srt):
    with pytest.raises(FormatError, match="expected cue number"):
        srt.parse_content("not a subtitle\n", "bad.srt")


def test_srt_round_trip_keeps_timings(srt):
    parsed = srt.parse_content(SRT_CONTENT)
    again = srt.parse_content(srt.write_content(parsed))
    assert [(e.key, e.value, e.comment) for e in again.entries] == \
           [(e.key, e.value, e.comment) for e in parsed.entries]


def test_srt_write_renumbers_and_times_plain_entries(srt):
    file = LocalizationFile("x.srt", entries=[
        LocalizationEntry("greeting", "Hello"),
        LocalizationEntry("farewell", "Bye"),
    ])
    content = srt.write_content(file)
    assert content.startswith("1\n00:00:00,000 --> 00:00:02,000\nHello\n")
    assert "2\n00:00:02,000 --> 00:00:04,000\nBye\n" in content

    warnings = srt.conversion_warnings(file)
    assert any("replaced by their position" in w for w in warnings)
    assert any("no timing" in w for w in warnings)


def test_vtt_parse(vtt):
    file = vtt.parse_content(VTT_CONTENT, "talk.de.vtt")
    assert file.culture == "de"
    assert file.keys == ["welcome", "2", "3"]
    assert file.get_value("welcome") == "Hello there"
    assert file.entries_by_key["welcome"].comment == "00:00:00.000 --> 00:00:02.000 align:center"
    assert file.get_value("3") == "Third cue"


def test_vtt_requires_header(vtt):
    with pytest.raises(FormatError, match="WEBVTT"):
        vtt.parse_content("00:00:00.000 --> 00:00:01.000\nHi\n", "bad.vtt")


def test_vtt_cue_without_timing(vtt):
    with pytest.raises(FormatError, match="without timing"):
        vtt.parse_content("WEBVTT\n\njust text\n", "bad.vtt")


def test_vtt_write_and_parse(vtt):
    file = LocalizationFile("x.vtt", entries=[
        LocalizationEntry("intro", "Line one\n\nLine two"),
        LocalizationEntry("outro", "Bye", comment="00:00:09.000 --> 00:00:10.000"),
    ])
    content = vtt.write_content(file)
    assert content.startswith("WEBVTT\n\n")

    parsed = vtt.parse_content(content)
    assert parsed.get_value("intro") == "Line one\nLine two"
    assert parsed.entries_by_key["outro"].comment == "00:00:09.000 --> 00:00:10.000"
    assert any("blank lines" in w for w in vtt.conversion_warnings(file))
