"""
Shared fixtures: a fresh in-memory database per test.
"""

import pytest

from app import create_app, init_db
from models import db


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        init_db()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.session


class FakeResponse:
    """Stand-in for the requests.Response returned by safe_fetch."""

    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code


class FakeFetcher:
    """Replaces safe_fetch; serves canned HTML or raises canned errors."""

    def __init__(self):
        self.pages = {}
        self.calls = []

    def __call__(self, url, headers=None, timeout=10, max_size=None):
        self.calls.append({'url': url, 'headers': headers, 'timeout': timeout})
        page = self.pages.get(url)
        if isinstance(page, Exception):
            raise page
        if page is None:
            raise AssertionError(f"unexpected fetch: {url}")
        return FakeResponse(page)


@pytest.fixture
def fake_fetch(monkeypatch):
    fetcher = FakeFetcher()
    monkeypatch.setattr('services.importer.safe_fetch', fetcher)
    return fetcher
