import pytest

from stem_client.core.domain.errors import ErrorKind
from stem_client.core.domain.options import StemCount
from stem_client.core.response_parser import parse_health_response, parse_separation_response


def test_full_success_payload_is_preserved():
    result = parse_separation_response(
        {
            "success": True,
            "message": "done",
            "job_id": "job-1",
            "output_files": ["vocals.wav", "drums.wav"],
            "stems": "4stems",
            "processing_time": 12.5,
        }
    ).unwrap()

    assert result.success is True
    assert result.message == "done"
    assert result.job_id == "job-1"
    assert result.output_files == ["vocals.wav", "drums.wav"]
    assert result.stems is StemCount.FOUR
    assert result.processing_time == 12.5


def test_optional_fields_get_defaults():
    result = parse_separation_response({"success": True, "job_id": "job-1", "output_files": []}).unwrap()

    assert result.stems is StemCount.TWO
    assert result.message == ""
    assert result.processing_time == 0
    assert result.output_files == []


def test_malformed_optional_fields_fall_back():
    result = parse_separation_response(
        {
            "success": True,
            "job_id": "job-1",
            "message": 7,
            "stems": "9stems",
            "output_files": ["vocals.wav", "", None, 3, "accompaniment.wav"],
            "processing_time": -4,
        }
    ).unwrap()

    assert result.message == ""
    assert result.stems is StemCount.TWO
    assert result.output_files == ["vocals.wav", "accompaniment.wav"]
    assert result.processing_time == 0


@pytest.mark.parametrize("processing_time", ["12", True, None, float("nan")])
def test_non_numeric_processing_time_defaults_to_zero(processing_time):
    result = parse_separation_response(
        {"success": True, "job_id": "j", "output_files": [], "processing_time": processing_time}
    ).unwrap()
    assert result.processing_time == 0


def test_explicit_failure_maps_to_api_error():
    result = parse_separation_response({"success": False, "message": "bad audio", "status": 400})

    assert not result.ok
    assert result.error.kind is ErrorKind.API_ERROR
    assert result.error.message == "bad audio"
    assert result.error.status == 400


def test_explicit_failure_without_details():
    result = parse_separation_response({"success": False})

    assert result.error.kind is ErrorKind.API_ERROR
    assert result.error.message == "Separation failed"
    assert result.error.status is None


@pytest.mark.parametrize(
    "body",
    [
        None,
        "ok",
        ["job-1"],
        {},
        {"success": "true", "job_id": "job-1", "output_files": []},
        {"success": True, "job_id": "", "output_files": []},
        {"success": True, "job_id": "   ", "output_files": []},
        {"success": True, "job_id": 12, "output_files": []},
        {"success": True, "output_files": []},
        {"success": True, "job_id": "job-1"},
        {"success": True, "job_id": "job-1", "output_files": "vocals.wav"},
    ],
)
def test_invalid_payloads(body):
    result = parse_separation_response(body)
    assert not result.ok
    assert result.error.kind is ErrorKind.INVALID_RESPONSE


def test_health_payload_kept_verbatim():
    health = parse_health_response({"status": "healthy", "version": "1.2.0", "uptime": 42}).unwrap()

    assert health.status == "healthy"
    assert health.version == "1.2.0"
    assert health.service is None
    assert health.model_dump()["uptime"] == 42


@pytest.mark.parametrize("body", [None, [], {}, {"status": 1}])
def test_health_payload_requires_status(body):
    assert parse_health_response(body).error.kind is ErrorKind.INVALID_RESPONSE
