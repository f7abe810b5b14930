import io
from pathlib import Path

import pytest

from stem_client.core.domain.errors import ErrorKind, StemSeparatorError
from stem_client.core.domain.models import AudioBlob
from stem_client.core.validation import (
    normalize_base_url,
    resolve_upload_filename,
    sanitize_filename,
    validate_file_input,
    validate_job_id,
    validate_timeout,
)


def _kind(result):
    assert not result.ok
    return result.error.kind


@pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
def test_file_input_rejects_missing_or_blank(value):
    assert _kind(validate_file_input(value)) is ErrorKind.INVALID_ARGUMENT


@pytest.mark.parametrize(
    "value",
    ["song.mp3", Path("song.mp3"), b"RIFF", bytearray(b"x"), io.BytesIO(b"x"), AudioBlob(data=b"x")],
)
def test_file_input_accepts_supported_shapes(value):
    assert validate_file_input(value).unwrap() is value


def test_file_input_rejects_text_streams_and_numbers():
    assert _kind(validate_file_input(io.StringIO("x"))) is ErrorKind.INVALID_ARGUMENT
    assert _kind(validate_file_input(42)) is ErrorKind.INVALID_ARGUMENT


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://x///", "https://x"),
        ("  https://api.example.com/  ", "https://api.example.com"),
        ("https://api.example.com/v2", "https://api.example.com/v2"),
    ],
)
def test_normalize_base_url(raw, expected):
    once = normalize_base_url(raw).unwrap()
    assert once == expected
    assert normalize_base_url(once).unwrap() == once


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_normalize_base_url_rejects_blank(raw):
    assert _kind(normalize_base_url(raw)) is ErrorKind.INVALID_ARGUMENT


@pytest.mark.parametrize("job_id", ["", "  ", "../job", "job/id", "job\\id", "a..b"])
def test_job_id_rejects_blank_and_traversal(job_id):
    assert _kind(validate_job_id(job_id)) is ErrorKind.INVALID_ARGUMENT


def test_job_id_accepts_plain_identifier():
    assert validate_job_id("job-1").unwrap() == "job-1"


@pytest.mark.parametrize("name", ["../vocals.wav", "a/../b.wav", "..", "vocals..wav"])
def test_sanitize_filename_rejects_dot_dot(name):
    assert _kind(sanitize_filename(name)) is ErrorKind.INVALID_ARGUMENT


@pytest.mark.parametrize(
    "name, expected",
    [("a/b/c.wav", "c.wav"), ("C:\\music\\drums.wav", "drums.wav"), ("vocals.wav", "vocals.wav")],
)
def test_sanitize_filename_keeps_basename(name, expected):
    assert sanitize_filename(name).unwrap() == expected


@pytest.mark.parametrize("name", ["", "   ", "dir/", "dir\\"])
def test_sanitize_filename_rejects_empty_basename(name):
    assert _kind(sanitize_filename(name)) is ErrorKind.INVALID_ARGUMENT


@pytest.mark.parametrize("value", [0, -1, 0.5, True, "1000", None, float("nan"), float("inf")])
def test_timeout_rejects_non_positive_or_non_numeric(value):
    assert _kind(validate_timeout(value)) is ErrorKind.INVALID_ARGUMENT


def test_timeout_accepts_positive_numbers():
    assert validate_timeout(1).unwrap() == 1
    assert validate_timeout(300_000).unwrap() == 300_000


def test_upload_filename_defaults_and_sanitizes():
    assert resolve_upload_filename(None).unwrap() == "audio"
    assert resolve_upload_filename("  ").unwrap() == "audio"
    assert resolve_upload_filename(" music/song.mp3 ").unwrap() == "song.mp3"
    assert _kind(resolve_upload_filename("../song.mp3")) is ErrorKind.INVALID_ARGUMENT


def test_unwrap_raises_the_error():
    with pytest.raises(StemSeparatorError) as exc:
        validate_job_id("").unwrap()
    assert exc.value.kind is ErrorKind.INVALID_ARGUMENT
    assert exc.value.status is None
