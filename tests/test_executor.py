from __future__ import annotations

import pytest
import requests

from bestbuy.base import RequestExecutor, ServiceError
from bestbuy.utils.config import ClientConfig
from bestbuy.version import USER_AGENT
from tests.mock_bestbuy_server import FakeResponse, FakeSession, RecordingLogger

URL = "https://api.bestbuy.com/v1/products?apiKey=KEY&format=json"


def make_executor(*responses):
    session = FakeSession(*responses)
    logger = RecordingLogger()
    return RequestExecutor(session=session, logger=logger), session, logger


def test_forced_options_override_caller_options():
    executor, session, _ = make_executor(FakeResponse("{}"))
    config = ClientConfig(api_key="KEY", transport_options={"allow_redirects": False, "stream": True, "timeout": 4})
    executor.execute(URL, config)
    _, kwargs = session.calls[0]
    assert kwargs["allow_redirects"] is True
    assert kwargs["stream"] is False
    assert kwargs["timeout"] == 4


def test_success_returns_body_and_logs_diagnostics_in_debug():
    executor, _, logger = make_executor(FakeResponse('{"total": 0}'))
    body = executor.execute(URL, ClientConfig(api_key="KEY", debug=True))
    assert body == '{"total": 0}'
    assert len(logger.infos) == 1
    assert "status=200" in logger.infos[0]
    assert URL in logger.infos[0]
    assert logger.errors == []


def test_success_without_debug_is_silent():
    executor, _, logger = make_executor(FakeResponse("{}"))
    executor.execute(URL, ClientConfig(api_key="KEY"))
    assert logger.infos == []


def test_connection_failure_raises_service_error_and_logs_once():
    executor, _, logger = make_executor(requests.ConnectionError("Connection refused"))
    with pytest.raises(ServiceError) as excinfo:
        executor.execute(URL, ClientConfig(api_key="KEY", debug=True))
    assert excinfo.value.status is None
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
    assert len(logger.errors) == 1
    assert "Connection refused" in logger.errors[0]
    assert logger.infos == []


def test_http_error_status_fails_the_call():
    executor, _, logger = make_executor(FakeResponse("Not Found", status_code=404))
    with pytest.raises(ServiceError) as excinfo:
        executor.execute(URL, ClientConfig(api_key="KEY", debug=True))
    assert excinfo.value.status == 404
    assert len(logger.errors) == 1
    assert logger.infos == []


def test_missing_logger_is_tolerated():
    executor = RequestExecutor(session=FakeSession(requests.Timeout("timed out")), logger=None)
    with pytest.raises(ServiceError):
        executor.execute(URL, ClientConfig(api_key="KEY", debug=True))


@pytest.mark.parametrize(
    "transport",
    [
        {"headers": None},
        {"headers": {"User-Agent": None}},
        {"headers": {"User-Agent": "spoofed/0.1", "X-Trace": "1"}},
        {},
    ],
)
def test_user_agent_is_always_sent(transport):
    executor, session, _ = make_executor(FakeResponse("{}"))
    executor.execute(URL, ClientConfig(api_key="KEY", transport_options=transport))
    _, kwargs = session.calls[0]
    assert kwargs["headers"]["User-Agent"] == USER_AGENT


def test_extra_headers_survive_user_agent_enforcement():
    executor, session, _ = make_executor(FakeResponse("{}"))
    executor.execute(URL, ClientConfig(api_key="KEY", transport_options={"headers": {"X-Trace": "1"}}))
    _, kwargs = session.calls[0]
    assert kwargs["headers"]["X-Trace"] == "1"
