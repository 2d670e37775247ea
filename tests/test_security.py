"""
Tests for URL validation and input sanitization.
"""

import pytest
import requests

from utils.sanitizer import sanitize_text, sanitize_multiline, sanitize_url
from utils.url_validator import is_private_ip, is_safe_url, safe_fetch, SSRFError


@pytest.mark.parametrize('ip', ['127.0.0.1', '10.0.0.5', '192.168.1.1', '169.254.169.254', '::1', 'garbage'])
def test_private_ips(ip):
    assert is_private_ip(ip)


def test_public_ip():
    assert not is_private_ip('93.184.216.34')


@pytest.mark.parametrize('url', [
    'file:///etc/passwd',
    'ftp://93.184.216.34/',
    'http://localhost:5000/',
    'http://127.0.0.1/',
    'http://[::1]/',
    'http:///no-host',
    '',
])
def test_unsafe_urls(url):
    ok, message = is_safe_url(url)
    assert not ok
    assert message


def test_public_ip_literal_is_safe():
    assert is_safe_url('https://93.184.216.34/recipe') == (True, None)


def test_safe_fetch_refuses_blocked_url():
    with pytest.raises(SSRFError):
        safe_fetch('http://192.168.0.10/admin')


def test_sanitize_text():
    assert sanitize_text('  Fish &amp; Chips\x00\n ') == 'Fish & Chips'
    assert sanitize_text(None) == ''
    assert sanitize_text(12) == '12'
    assert sanitize_text('abcdef', max_length=3) == 'abc'


def test_sanitize_multiline_keeps_paragraphs():
    assert sanitize_multiline('Step 1:  Mix\r\n\r\n\r\n\r\nStep 2: Bake ') == 'Step 1: Mix\n\nStep 2: Bake'


def test_sanitize_url():
    assert sanitize_url('  https://example.com/a ') == 'https://example.com/a'
    assert sanitize_url('javascript:alert(1)') == ''
    assert sanitize_url('https://') == ''
    assert sanitize_url(None) == ''


class _StubResponse:
    def __init__(self, body=b'', headers=None, redirect_to=None):
        self.body = body
        self.headers = dict(headers or {})
        self.is_redirect = redirect_to is not None
        if redirect_to:
            self.headers['location'] = redirect_to
        self.closed = False
        self._content = None

    @property
    def content(self):
        return self._content

    def close(self):
        self.closed = True

    def raise_for_status(self):
        pass

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start:start + chunk_size]


def _serve(monkeypatch, responses):
    requested = []

    def fake_get(url, **kwargs):
        requested.append(url)
        return responses.pop(0)

    monkeypatch.setattr('utils.url_validator.requests.get', fake_get)
    return requested


def test_safe_fetch_follows_public_redirects(monkeypatch):
    requested = _serve(monkeypatch, [
        _StubResponse(redirect_to='/recipes/2'),
        _StubResponse(body=b'<html>ok</html>'),
    ])

    response = safe_fetch('https://93.184.216.34/recipes/1')

    assert response.content == b'<html>ok</html>'
    assert requested == ['https://93.184.216.34/recipes/1', 'https://93.184.216.34/recipes/2']


def test_safe_fetch_blocks_redirect_to_private_host(monkeypatch):
    requested = _serve(monkeypatch, [_StubResponse(redirect_to='http://127.0.0.1/admin')])

    with pytest.raises(SSRFError):
        safe_fetch('https://93.184.216.34/recipe')
    assert requested == ['https://93.184.216.34/recipe']


def test_safe_fetch_enforces_size_limit(monkeypatch):
    _serve(monkeypatch, [_StubResponse(body=b'x' * 100)])
    with pytest.raises(SSRFError):
        safe_fetch('https://93.184.216.34/big', max_size=10)

    _serve(monkeypatch, [_StubResponse(headers={'content-length': '5000'})])
    with pytest.raises(SSRFError):
        safe_fetch('https://93.184.216.34/big', max_size=10)


def test_safe_fetch_rejects_redirect_without_location(monkeypatch):
    requested = _serve(monkeypatch, [_StubResponse(redirect_to='')])

    with pytest.raises(requests.RequestException) as excinfo:
        safe_fetch('https://93.184.216.34/moved')
    assert not isinstance(excinfo.value, requests.TooManyRedirects)
    assert requested == ['https://93.184.216.34/moved']
