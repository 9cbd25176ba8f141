import logging
import os
import subprocess
import sys
import textwrap
from pathlib import Path
from unittest import mock

import pytest
import requests

from lol_api import (
    AuthenticationError,
    Config,
    ConfigurationError,
    DataNotFoundError,
    DecodeError,
    LeagueOfLegendsClient,
    RateLimitError,
    TransportError,
    UnknownEndpoint,
    UnknownRegion,
)

API_KEY = "RGAPI-test-key"


def _response(status_code=200, reason="OK", payload=None, headers=None, content=b"{}"):
    response = mock.Mock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.headers = headers or {}
    response.content = content
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def client():
    with LeagueOfLegendsClient(api_key=API_KEY) as client:
        yield client


def test_defaults():
    client = LeagueOfLegendsClient(api_key=API_KEY)
    assert client.region == "na"
    assert client.timeout == 5
    assert client.debug is False
    assert client.rate_limiter is None


def test_unknown_region_rejected_at_construction():
    with pytest.raises(UnknownRegion):
        LeagueOfLegendsClient(api_key=API_KEY, region="atlantis")


def test_missing_api_key_rejected():
    with pytest.raises(ConfigurationError):
        LeagueOfLegendsClient(api_key="")


def test_static_data_request(client):
    with mock.patch.object(client.session, "get", return_value=_response(payload={"id": 1})) as get:
        result = client.static_data(type="champion", id=1, dataById=1)

    assert result == {"id": 1}
    url = get.call_args[0][0]
    assert url == (
        "https://na.api.pvp.net/api/lol/static-data/na/v1.2/champion/1"
        f"?api_key={API_KEY}&dataById=1"
    )
    assert get.call_args[1]["timeout"] == 5


def test_mapping_argument_is_accepted(client):
    with mock.patch.object(client.session, "get", return_value=_response(payload={})) as get:
        client.summoner({"by": "name", "id": "abc"})

    assert "/summoner/by-name/abc?" in get.call_args[0][0]


@pytest.mark.parametrize(
    "method, path",
    [
        ("champion", "/api/lol/na/v1.2/champion"),
        ("current_game", "/observer-mode/rest/consumer/getSpectatorGameInfo/NA1"),
        ("game", "/api/lol/na/v1.3/game"),
        ("league", "/api/lol/na/v2.5/league"),
        ("match", "/api/lol/na/v2.2/match"),
        ("matchlist", "/api/lol/na/v2.2/matchlist"),
        ("static_data", "/api/lol/static-data/na/v1.2/"),
        ("stats", "/api/lol/na/v1.3/stats"),
        ("summoner", "/api/lol/na/v1.4/summoner"),
        ("team", "/api/lol/na/v2.4/team"),
    ],
)
def test_one_method_per_endpoint(client, method, path):
    with mock.patch.object(client.session, "get", return_value=_response(payload=[])) as get:
        getattr(client, method)()

    assert get.call_args[0][0] == f"https://na.api.pvp.net{path}?api_key={API_KEY}"


def test_unknown_endpoint_makes_no_request(client):
    with mock.patch.object(client.session, "get") as get:
        with pytest.raises(UnknownEndpoint):
            client.request("featured_games")
    get.assert_not_called()


def test_not_found(client):
    with mock.patch.object(client.session, "get", return_value=_response(404, "Not Found")):
        with pytest.raises(DataNotFoundError) as excinfo:
            client.match(id=1)

    assert excinfo.value.status_code == 404
    assert excinfo.value.status_line == "404 Not Found"
    assert API_KEY not in str(excinfo.value)


def test_rate_limited_is_not_retried(client):
    response = _response(429, "Too Many Requests", headers={"Retry-After": "10"})
    with mock.patch.object(client.session, "get", return_value=response) as get:
        with pytest.raises(RateLimitError) as excinfo:
            client.champion()

    assert excinfo.value.retry_after == 10
    assert get.call_count == 1


def test_forbidden(client):
    with mock.patch.object(client.session, "get", return_value=_response(403, "Forbidden")):
        with pytest.raises(AuthenticationError):
            client.champion()


def test_server_error_carries_status_line(client):
    with mock.patch.object(client.session, "get", return_value=_response(503, "Service Unavailable")):
        with pytest.raises(TransportError) as excinfo:
            client.champion()

    assert excinfo.value.status_code == 503
    assert excinfo.value.status_line == "503 Service Unavailable"


def test_timeout(client):
    with mock.patch.object(client.session, "get", side_effect=requests.exceptions.Timeout()):
        with pytest.raises(TransportError, match="timeout after 5 seconds"):
            client.champion()


def test_connection_error(client):
    with mock.patch.object(client.session, "get", side_effect=requests.exceptions.ConnectionError("refused")):
        with pytest.raises(TransportError, match="Connection error"):
            client.champion()


def test_invalid_json(client):
    response = _response(payload=ValueError("Expecting value"))
    with mock.patch.object(client.session, "get", return_value=response):
        with pytest.raises(DecodeError):
            client.champion()


def test_debug_logs_uri(caplog):
    client = LeagueOfLegendsClient(api_key=API_KEY, debug=True)
    caplog.set_level(logging.INFO, logger="lol_api.client")

    with mock.patch.object(client.session, "get", return_value=_response(payload={})):
        client.champion(id=1)

    assert f"GET https://na.api.pvp.net/api/lol/na/v1.2/champion/1?api_key={API_KEY}" in caplog.messages


def test_without_debug_uri_not_logged_at_info(client, caplog):
    caplog.set_level(logging.INFO, logger="lol_api.client")

    with mock.patch.object(client.session, "get", return_value=_response(payload={})):
        client.champion(id=1)

    assert not any(message.startswith("GET ") for message in caplog.messages)


def test_rate_limiter_acquired_before_request():
    limiter = mock.Mock()
    client = LeagueOfLegendsClient(api_key=API_KEY, rate_limiter=limiter)

    with mock.patch.object(client.session, "get", return_value=_response(payload={})):
        client.champion()

    limiter.acquire.assert_called_once_with()


def test_from_config(monkeypatch):
    monkeypatch.setattr(Config, "RIOT_API_KEY", API_KEY)
    monkeypatch.setattr(Config, "LOL_REGION", "euw")
    monkeypatch.setattr(Config, "LOL_TIMEOUT", 10)
    monkeypatch.setattr(Config, "LOL_DEBUG", True)

    client = LeagueOfLegendsClient.from_config()

    assert client.region == "euw"
    assert client.timeout == 10
    assert client.debug is True
    assert client.build_url("current_game").startswith(
        "https://euw.api.pvp.net/observer-mode/rest/consumer/getSpectatorGameInfo/EUW1?"
    )


def test_from_config_requires_api_key(monkeypatch):
    monkeypatch.setattr(Config, "RIOT_API_KEY", "")

    with pytest.raises(ConfigurationError):
        LeagueOfLegendsClient.from_config()


@pytest.mark.parametrize("status_code, reason", [(201, "Created"), (202, "Accepted")])
def test_any_2xx_is_success(client, status_code, reason):
    with mock.patch.object(client.session, "get", return_value=_response(status_code, reason, payload={"ok": 1})):
        assert client.champion() == {"ok": 1}


def test_no_content_returns_none(client):
    response = _response(204, "No Content", content=b"")
    with mock.patch.object(client.session, "get", return_value=response):
        assert client.current_game() is None
    response.json.assert_not_called()


def test_redirect_is_not_success(client):
    with mock.patch.object(client.session, "get", return_value=_response(302, "Found")):
        with pytest.raises(TransportError) as excinfo:
            client.champion()

    assert excinfo.value.status_line == "302 Found"


def test_redact_url(client):
    url = client.build_url("summoner", by="name", id="abc")
    assert client.redact_url(url) == (
        "https://na.api.pvp.net/api/lol/na/v1.4/summoner/by-name/abc?api_key=<api_key>"
    )


def test_debug_uri_reaches_stderr_without_logging_config():
    script = textwrap.dedent(
        f"""
        from unittest import mock
        from lol_api import LeagueOfLegendsClient

        client = LeagueOfLegendsClient(api_key="{API_KEY}", debug=True)
        response = mock.Mock(status_code=200, reason="OK", content=b"{{}}")
        response.json.return_value = {{}}
        with mock.patch.object(client.session, "get", return_value=response):
            client.champion()
        """
    )
    src = str(Path(__file__).resolve().parents[1] / "src")
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [src, env.get("PYTHONPATH")]))

    result = subprocess.run(
        [sys.executable, "-c", script],
        capture_output=True,
        text=True,
        env=env,
        timeout=60,
    )

    assert result.returncode == 0, result.stderr
    assert f"GET https://na.api.pvp.net/api/lol/na/v1.2/champion?api_key={API_KEY}" in result.stderr
