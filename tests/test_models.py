from datetime import timedelta

import pytest
from pydantic import ValidationError

from httpdig.models import Rcode, ResourceRecord, Response


def test_full_payload_maps_onto_model() -> None:
    payload = {
        "Status": 0,
        "TC": True,
        "RD": True,
        "RA": True,
        "AD": True,
        "CD": False,
        "Question": [{"name": "example.com.", "type": 28}],
        "Answer": [
            {"name": "example.com.", "type": 28, "TTL": 86400, "data": "2606:2800:220:1:248:1893:25c8:1946"}
        ],
        "Additional": [{"name": "opt.", "type": 41, "udp": 512}, "raw-text"],
        "edns_client_subnet": "0.0.0.0/0",
        "Comment": "",
        "Unexpected": {"ignored": True},
    }

    response = Response.model_validate(payload)

    assert response.tc and response.ad and not response.cd
    assert response.question[0].type == 28
    assert response.answer[0].ttl == timedelta(days=1)
    assert response.additional == [{"name": "opt.", "type": 41, "udp": 512}, "raw-text"]
    assert response.edns_client_subnet == "0.0.0.0/0"
    assert response.rcode is Rcode.NOERROR


def test_missing_sections_default_to_empty() -> None:
    response = Response.model_validate_json('{"Status": 2}')

    assert response.question == []
    assert response.answer == []
    assert response.authority == []
    assert response.additional == []
    assert response.comment == ""
    assert response.rcode is Rcode.SERVFAIL
    assert not response.ok


def test_status_is_required() -> None:
    with pytest.raises(ValidationError):
        Response.model_validate_json("{}")


def test_unlisted_status_has_no_rcode() -> None:
    assert Response(status=23).rcode is None


def test_records_accept_python_field_names() -> None:
    record = ResourceRecord(name="example.com.", type=15, ttl=timedelta(seconds=60), data="10 mx.example.com.")
    assert record.ttl.total_seconds() == 60
    assert ResourceRecord.model_validate({"name": "a.", "type": 1, "TTL": 0, "data": "127.0.0.1"}).ttl == timedelta(0)
