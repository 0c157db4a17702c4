import pytest

from switchboard.config import ServiceConfigEntry
from switchboard.containers import ContainerRecord
from switchboard.reconciler import index_containers, reconcile, reconcile_stream

from .conftest import compose_record, ndjson


def _rec(**fields) -> ContainerRecord:
    return ContainerRecord.model_validate(fields)


SERVICES = [
    ServiceConfigEntry(name="InnerGate", display_name="Inner Gate"),
    ServiceConfigEntry(name="github-dispatcher", display_name="GitHub Dispatcher"),
    ServiceConfigEntry(name="RediFire", display_name="RediFire"),
]


def test_reconcile_matches_and_defaults():
    records = [
        _rec(Names="innergate-innergate-1", State="running", Status="Up 2 hours",
             Labels={"com.docker.compose.project.working_dir": "/repo/InnerGate"}),
        _rec(Names="/github-dispatcher", State="exited", Status="Exited (0) 5 minutes ago"),
    ]
    out = reconcile(SERVICES, records)

    assert [s.name for s in out] == ["InnerGate", "github-dispatcher", "RediFire"]
    assert [s.display_name for s in out] == ["Inner Gate", "GitHub Dispatcher", "RediFire"]
    assert (out[0].state, out[0].status) == ("running", "Up 2 hours")
    assert (out[1].state, out[1].status) == ("exited", "Exited (0) 5 minutes ago")
    assert (out[2].state, out[2].status) == ("unknown", "Not found")


@pytest.mark.parametrize("count", [0, 1, 5])
def test_output_length_equals_configured_count(count):
    records = [_rec(Names=f"/svc-{i}", State="running") for i in range(count)]
    assert len(reconcile(SERVICES, records)) == len(SERVICES)


def test_empty_configuration_yields_empty_view():
    assert reconcile([], [_rec(Names="/InnerGate", State="running")]) == []


def test_unconfigured_containers_are_ignored():
    records = [_rec(Names="/postgres", State="running"), _rec(Names="/redis", State="running")]
    out = reconcile(SERVICES, records)
    assert all(s.state == "unknown" for s in out)


def test_lookup_is_case_sensitive():
    out = reconcile(SERVICES, [_rec(Names="/innergate", State="running")])
    assert out[0].state == "unknown"


def test_duplicate_keys_last_record_wins():
    records = [
        _rec(Names="/a", State="exited", Status="Exited (1)", Labels={"com.docker.compose.project.working_dir": "/r/RediFire"}),
        _rec(Names="/b", State="running", Status="Up 1 second", Labels={"com.docker.compose.project.working_dir": "/r/RediFire"}),
    ]
    assert index_containers(records)["RediFire"].name == "/b"
    out = reconcile(SERVICES, records)
    assert (out[2].state, out[2].status) == ("running", "Up 1 second")


def test_configured_order_is_preserved_regardless_of_feed_order():
    records = [_rec(Names=f"/{s.name}", State="running") for s in reversed(SERVICES)]
    assert [s.name for s in reconcile(SERVICES, records)] == [s.name for s in SERVICES]


def test_duplicate_configured_names_each_get_an_entry():
    services = SERVICES + [ServiceConfigEntry(name="InnerGate", display_name="Inner Gate (again)")]
    out = reconcile(services, [_rec(Names="/InnerGate", State="running", Status="Up")])
    assert len(out) == 4
    assert out[0].state == out[3].state == "running"


def test_reconcile_stream_skips_bad_lines():
    body = ndjson(compose_record("innergate-innergate-1", "/repo/InnerGate")) + "garbage\n" + ndjson(
        compose_record("redifire-web-1", "/repo/RediFire/", state="restarting", status="Restarting (1) 2 seconds ago")
    )
    out = reconcile_stream(SERVICES, body)
    assert [s.state for s in out] == ["running", "unknown", "restarting"]
    assert out[2].status == "Restarting (1) 2 seconds ago"


def test_status_serializes_with_camel_case():
    out = reconcile(SERVICES[:1], [])
    assert out[0].model_dump(by_alias=True) == {
        "name": "InnerGate",
        "displayName": "Inner Gate",
        "state": "unknown",
        "status": "Not found",
    }
