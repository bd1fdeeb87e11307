from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.responses import Response

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from unified_response.core.config import ResponseSettings, get_settings  # noqa: E402

get_settings.cache_clear()

from unified_response.api.responder import Responder  # noqa: E402

SettingsFactory = Callable[..., ResponseSettings]


def body_of(response: Response) -> dict[str, Any]:
    return json.loads(response.body)


@pytest.fixture()
def settings_factory() -> SettingsFactory:
    def _create(**kwargs: Any) -> ResponseSettings:
        return ResponseSettings(_env_file=None, **kwargs)

    return _create


@pytest.fixture()
def settings(settings_factory: SettingsFactory) -> ResponseSettings:
    return settings_factory()


@pytest.fixture()
def restful_settings(settings_factory: SettingsFactory) -> ResponseSettings:
    return settings_factory(is_restful=True)


@pytest.fixture()
def responder(settings: ResponseSettings) -> Responder:
    return Responder(settings)


@pytest.fixture()
def restful_responder(restful_settings: ResponseSettings) -> Responder:
    return Responder(restful_settings)


@pytest.fixture()
def client_for() -> Generator[Callable[[FastAPI], TestClient], None, None]:
    clients: list[TestClient] = []

    def _client(app: FastAPI) -> TestClient:
        test_client = TestClient(app, raise_server_exceptions=False, follow_redirects=False)
        clients.append(test_client)
        return test_client

    yield _client
    for test_client in clients:
        test_client.close()
