import pytest
import requests

from clarivana_utils.remote import fetch_json, is_transient, retry_transient_errors


@pytest.fixture
def no_sleep(mocker):
    return mocker.patch("clarivana_utils.remote.retry.time.sleep")


def http_response(mocker, status_code, payload=None):
    response = mocker.Mock(status_code=status_code)
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} error", response=response
        )
    response.json.return_value = payload
    return response


def test_retry_recovers_after_connection_error(mocker, no_sleep):
    ok = http_response(mocker, 200, [{"id": "E102", "name": "Tartrazine"}])
    get = mocker.patch(
        "clarivana_utils.remote.fetch.requests.get",
        side_effect=[requests.exceptions.ConnectionError("reset"), ok],
    )

    assert fetch_json("https://example.org/d.json") == [{"id": "E102", "name": "Tartrazine"}]
    assert get.call_count == 2
    no_sleep.assert_called_once_with(1.0)


@pytest.mark.parametrize("status_code", [429, 500, 502, 503, 504])
def test_server_errors_are_retried(mocker, no_sleep, status_code):
    get = mocker.patch(
        "clarivana_utils.remote.fetch.requests.get",
        side_effect=[http_response(mocker, status_code), http_response(mocker, 200, [])],
    )

    assert fetch_json("https://example.org/d.json") == []
    assert get.call_count == 2
    no_sleep.assert_called_once_with(1.0)


def test_timeouts_are_retried(mocker, no_sleep):
    get = mocker.patch(
        "clarivana_utils.remote.fetch.requests.get",
        side_effect=[requests.exceptions.ConnectTimeout("slow"), http_response(mocker, 200, {})],
    )

    assert fetch_json("https://example.org/d.json") == {}
    assert get.call_count == 2


def test_retry_gives_up_after_max_attempts(mocker, no_sleep):
    get = mocker.patch(
        "clarivana_utils.remote.fetch.requests.get",
        return_value=http_response(mocker, 503),
    )

    with pytest.raises(requests.HTTPError):
        fetch_json("https://example.org/d.json")
    assert get.call_count == 3
    assert [c.args[0] for c in no_sleep.call_args_list] == [1.0, 2.0]


@pytest.mark.parametrize("status_code", [400, 403, 404])
def test_client_errors_are_not_retried(mocker, no_sleep, status_code):
    get = mocker.patch(
        "clarivana_utils.remote.fetch.requests.get",
        return_value=http_response(mocker, status_code),
    )

    with pytest.raises(requests.HTTPError):
        fetch_json("https://example.org/missing.json")
    get.assert_called_once()
    no_sleep.assert_not_called()


@pytest.mark.parametrize(
    "error, expected",
    [
        (requests.exceptions.ConnectionError("down"), True),
        (requests.exceptions.ReadTimeout("slow"), True),
        (ConnectionResetError("reset by peer"), True),
        (requests.HTTPError("no response attached"), False),
        (ValueError("bad json"), False),
    ],
)
def test_is_transient(error, expected):
    assert is_transient(error) is expected


def test_custom_retry_predicate(no_sleep):
    calls = []

    @retry_transient_errors(
        max_attempts=2, initial_delay=0.5, retry_if=lambda e: isinstance(e, KeyError)
    )
    def flaky(value):
        calls.append(value)
        if len(calls) == 1:
            raise KeyError("warming up")
        return value * 2

    assert flaky(21) == 42
    assert calls == [21, 21]
    no_sleep.assert_called_once_with(0.5)


def test_max_attempts_must_be_positive():
    with pytest.raises(ValueError):
        retry_transient_errors(max_attempts=0)
