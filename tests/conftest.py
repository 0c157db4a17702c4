import json

import httpx
import pytest
from fastapi.testclient import TestClient

from switchboard.app import create_app
from switchboard.config import AppConfig
from switchboard.status_source import StatusSource
from switchboard.toggle import ToggleForwarder


STATUS_URL = "http://runtime.test/containers"
TOGGLE_URL = "http://runtime.test/toggle"


def ndjson(*records: dict) -> str:
    return "".join(json.dumps(r) + "\n" for r in records)


def compose_record(name: str, working_dir: str | None, state: str = "running", status: str = "Up 3 minutes") -> dict:
    labels = {"com.docker.compose.service": name.lower()}
    if working_dir is not None:
        labels["com.docker.compose.project.working_dir"] = working_dir
    return {"Command": '"python app.py"', "State": state, "Status": status, "Names": name, "Labels": labels}


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig.model_validate(
        {
            "services": [
                {"name": "InnerGate", "displayName": "Inner Gate"},
                {"name": "github-dispatcher", "displayName": "GitHub Dispatcher"},
                {"name": "RediFire", "displayName": "RediFire"},
            ],
            "dockerStatusUrl": STATUS_URL,
            "toggleServiceUrl": TOGGLE_URL,
            "pollIntervalSeconds": 7,
        }
    )


class Downstream:
    """Records outbound requests and answers them with canned handlers."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_handler = lambda request: httpx.Response(200, text="")
        self.toggle_handler = lambda request: httpx.Response(200, json={"ok": True})
        self.routes: dict = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if str(request.url) in self.routes:
            return self.routes[str(request.url)](request)
        if str(request.url) == STATUS_URL:
            return self.status_handler(request)
        if str(request.url) == TOGGLE_URL:
            return self.toggle_handler(request)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def downstream() -> Downstream:
    return Downstream()


@pytest.fixture
def client(app_config, downstream):
    app = create_app(
        app_config,
        static_dir=None,
        status_source=StatusSource(STATUS_URL, transport=downstream.transport),
        toggler=ToggleForwarder(TOGGLE_URL, transport=downstream.transport),
    )
    with TestClient(app) as c:
        yield c
