from unittest import mock

import pytest
import requests

from barber_prices import fetch as fetch_module
from barber_prices.errors import FetchError
from barber_prices.fetch import HttpPageFetcher, page_text


def _response(text="", status=200):
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = status
    resp.text = text
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error", response=resp)
    else:
        resp.raise_for_status.return_value = None
    return resp


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(fetch_module.time, "sleep", lambda s: None)


def test_page_text_collapses_whitespace_and_drops_scripts():
    html = (
        "<html><head><style>p {}</style><script>var cena = 1;</script></head>"
        "<body><p>Muško   šišanje</p>\n<p>900&nbsp;din</p></body></html>"
    )
    assert page_text(html) == "Muško šišanje 900 din"


def test_fetch_returns_page_text_with_user_agent():
    session = mock.Mock()
    session.get.return_value = _response("<p>Pranje kose, 250 din</p>")
    fetcher = HttpPageFetcher(timeout_seconds=7, user_agent="TestAgent/1.0", session=session)

    assert fetcher.fetch("https://a.example/") == "Pranje kose, 250 din"
    session.get.assert_called_once_with(
        "https://a.example/", headers={"User-Agent": "TestAgent/1.0"}, timeout=7
    )


def test_retries_transient_errors_then_succeeds():
    session = mock.Mock()
    session.get.side_effect = [requests.ConnectionError("reset"), _response("<p>ok</p>")]
    fetcher = HttpPageFetcher(max_retries=3, session=session)

    assert fetcher.fetch("https://a.example/") == "ok"
    assert session.get.call_count == 2


def test_gives_up_after_max_retries():
    session = mock.Mock()
    session.get.side_effect = requests.Timeout("read timed out")
    fetcher = HttpPageFetcher(max_retries=3, session=session)

    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch("https://a.example/")
    assert session.get.call_count == 3
    assert "read timed out" in str(excinfo.value)


def test_client_error_is_not_retried():
    session = mock.Mock()
    session.get.return_value = _response(status=404)
    fetcher = HttpPageFetcher(max_retries=3, session=session)

    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch("https://a.example/missing")
    assert excinfo.value.http_status == 404
    assert session.get.call_count == 1


def test_server_error_is_retried():
    session = mock.Mock()
    session.get.return_value = _response(status=503)
    fetcher = HttpPageFetcher(max_retries=2, session=session)

    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch("https://a.example/")
    assert excinfo.value.http_status == 503
    assert session.get.call_count == 2
