# pyright: reportUnknownParameterType=false, reportUnknownMemberType=false
from dataclasses import replace
from unittest.mock import Mock, patch

import pytest
import requests

from courier.networking.dispatch import CancellationHandle
from courier.networking.errors import RequestTimeoutError, TransportError
from courier.networking.transport import RequestsTransport
from courier.networking.types import Credentials, HttpMethod, TransportRequest


def _mock_response(*, status: int = 200, reason: str = "OK"):
    response = Mock()
    response.status_code = status
    response.reason = reason
    return response


def _request(
    url: str = "https://api.example.com/todos",
    *,
    method: HttpMethod = HttpMethod.GET,
    headers=None,
    body=None,
    credentials: Credentials = Credentials.SAME_ORIGIN,
) -> TransportRequest:
    return TransportRequest(
        url=url,
        method=method,
        headers=headers or {},
        body=body,
        credentials=credentials,
        signal=CancellationHandle(),
    )


@pytest.fixture
def transport():
    return RequestsTransport(
        origin="https://api.example.com", timeout_seconds=5.0
    )


@pytest.mark.asyncio
@patch("requests.Session.send")
async def test_sends_prepared_request(mock_send, transport):
    response = _mock_response()
    mock_send.return_value = response

    result = await transport(
        _request(
            method=HttpMethod.POST,
            headers={"Content-Type": "application/json"},
            body='{"a": 1}',
        )
    )

    assert result is response
    prepared = mock_send.call_args.args[0]
    assert prepared.method == "POST"
    assert prepared.url == "https://api.example.com/todos"
    assert prepared.headers["Content-Type"] == "application/json"
    assert prepared.body == '{"a": 1}'
    assert mock_send.call_args.kwargs == {"timeout": 5.0, "verify": True}


@pytest.mark.asyncio
@patch("requests.Session.send")
async def test_error_statuses_are_returned_not_raised(mock_send, transport):
    mock_send.return_value = _mock_response(status=500, reason="Server Error")

    result = await transport(_request())

    assert result.status_code == 500


@pytest.mark.asyncio
@patch("requests.Session.send")
async def test_respects_verify_tls_false(mock_send):
    transport = RequestsTransport(verify_tls=False)
    mock_send.return_value = _mock_response()

    await transport(_request())

    assert mock_send.call_args.kwargs == {"timeout": None, "verify": False}


@pytest.mark.asyncio
@patch("requests.Session.send")
async def test_same_origin_keeps_cookie_header(mock_send, transport):
    mock_send.return_value = _mock_response()

    await transport(_request(headers={"Cookie": "sid=abc"}))

    assert mock_send.call_args.args[0].headers["Cookie"] == "sid=abc"


@pytest.mark.asyncio
@patch("requests.Session.send")
async def test_cross_origin_drops_cookie_header(mock_send, transport):
    mock_send.return_value = _mock_response()

    await transport(
        _request("https://other.example.com/x", headers={"Cookie": "sid=abc"})
    )

    assert "Cookie" not in mock_send.call_args.args[0].headers


@pytest.mark.asyncio
@patch("requests.Session.send")
async def test_include_credentials_keeps_cross_origin_cookie(
    mock_send, transport
):
    mock_send.return_value = _mock_response()

    await transport(
        _request(
            "https://other.example.com/x",
            headers={"Cookie": "sid=abc"},
            credentials=Credentials.INCLUDE,
        )
    )

    assert mock_send.call_args.args[0].headers["Cookie"] == "sid=abc"


@pytest.mark.asyncio
@patch("requests.Session.send")
async def test_timeout_maps_to_request_timeout_error(mock_send, transport):
    mock_send.side_effect = requests.exceptions.Timeout("Timed out")

    with pytest.raises(RequestTimeoutError) as exc_info:
        await transport(_request())

    assert isinstance(exc_info.value.original_error, requests.Timeout)


@pytest.mark.asyncio
@patch("requests.Session.send")
async def test_connection_error_maps_to_transport_error(mock_send, transport):
    mock_send.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(TransportError) as exc_info:
        await transport(_request())

    assert not isinstance(exc_info.value, RequestTimeoutError)
    assert exc_info.value.url == "https://api.example.com/todos"


def test_close_closes_session():
    session = Mock()
    RequestsTransport(session=session).close()

    session.close.assert_called_once_with()


@pytest.mark.asyncio
@patch("requests.Session.send")
async def test_request_socket_timeout_takes_precedence(mock_send, transport):
    mock_send.return_value = _mock_response()

    await transport(replace(_request(), socket_timeout_seconds=0.25))

    assert mock_send.call_args.kwargs["timeout"] == 0.25
