#!/usr/bin/env python3
"""
Integration tests for the reading workflow against a fake backend.

Real transport, gateways, session manager, catalog store, reader controller
and library coordinator; HTTP is answered at the requests.Session boundary.

Journey:
1. Sign in -> session persisted, bearer token attached
2. Open a premium title as a viewer -> denied, upgrade offered
3. Upgrade -> premium title opens, page turns are synced
4. Server rejects the credential on any call -> forced logout everywhere
"""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
import requests
from PySide6.QtWidgets import QApplication

from vip_reader.coordinators import LibraryCoordinator, ReaderController, ReaderState
from vip_reader.core import SignInMode, SignInRequest
from vip_reader.io import (
    ApiClient,
    ApiError,
    CatalogGateway,
    IdentityGateway,
    LocalSessionStorage,
    ProgressGateway,
)
from vip_reader.services import AuthFailure, CatalogStore, SessionManager
from vip_reader.ui import LibraryScreen


def ensure_qt_app():
    if QApplication.instance() is None:
        QApplication([])


class InlineThreadPool:
    def start(self, worker):
        worker.run()


BOOKS = [
    {
        "id": "10",
        "title": "Free Title",
        "author": "A. Writer",
        "description": "",
        "coverUrl": "",
        "pdfUrl": "/files/10.pdf",
        "isVip": False,
        "publishedAt": "2024-04-01",
        "pages": 50,
        "lastReadPage": 0,
    },
    {
        "id": "11",
        "title": "Premium Title",
        "author": "B. Writer",
        "description": "",
        "coverUrl": "",
        "pdfUrl": "/files/11.pdf",
        "isVip": True,
        "publishedAt": "2024-04-02",
        "pages": 80,
        "lastReadPage": 0,
    },
]


def make_response(status_code: int, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.content = b"" if body is None else json.dumps(body).encode()
    response.json.return_value = body
    response.text = "" if body is None else json.dumps(body)
    return response


class FakeBackend:
    """Answers requests by (method, path); records every call."""

    BASE = "http://api.test/api"

    def __init__(self):
        self.calls = []
        self.revoked = False
        self.routes = {
            ("POST", "/auth/login"): (
                200,
                {"token": "tok-1", "user": {"id": "u1", "email": "reader@example.com", "name": "Reader"}},
            ),
            ("GET", "/books"): (200, BOOKS),
            ("GET", "/books/10/pdf"): (200, {"pdfUrl": "https://cdn.test/10.pdf"}),
            ("GET", "/books/11/pdf"): (200, {"pdfUrl": "https://cdn.test/11.pdf"}),
            ("POST", "/user/reading-progress"): (200, {"ok": True}),
            ("DELETE", "/books/10"): (204, None),
        }

    def __call__(self, method, url, **kwargs):
        path = url[len(self.BASE):]
        self.calls.append((method, path, kwargs))
        authorization = kwargs.get("headers", {}).get("Authorization")
        if self.revoked and authorization:
            return make_response(401, {"message": "Token expired"})
        status, body = self.routes.get((method, path), (404, {"message": "Not found"}))
        return make_response(status, body)

    def calls_to(self, method, path):
        return [call for call in self.calls if call[0] == method and call[1] == path]


@pytest.fixture
def backend():
    backend = FakeBackend()
    with patch.object(requests.Session, "request", side_effect=backend):
        yield backend


@pytest.fixture
def app(backend, tmp_path):
    """Wire the application the way the composition root does."""
    ensure_qt_app()
    api_client = ApiClient(FakeBackend.BASE)
    catalog_gateway = CatalogGateway(api_client)
    session_manager = SessionManager(
        identity_gateway=IdentityGateway(api_client),
        storage=LocalSessionStorage(tmp_path),
        api_client=api_client,
        sleep=lambda _seconds: None,
    )
    catalog_store = CatalogStore(catalog_gateway)
    pool = InlineThreadPool()
    reader = ReaderController(
        session_manager=session_manager,
        catalog_store=catalog_store,
        catalog_gateway=catalog_gateway,
        progress_gateway=ProgressGateway(api_client),
        thread_pool=pool,
    )
    main_window = MagicMock()
    main_window.prompt_login.return_value = None
    main_window.confirm_upgrade.return_value = True
    library = LibraryCoordinator(
        library_screen=LibraryScreen(),
        catalog_store=catalog_store,
        session_manager=session_manager,
        reader_controller=reader,
        main_window=main_window,
        thread_pool=pool,
    )

    return SimpleNamespace(
        session_manager=session_manager,
        catalog_store=catalog_store,
        reader=reader,
        library=library,
        main_window=main_window,
        storage=session_manager.storage,
    )


def sign_in(app):
    assert app.session_manager.establish_session("reader@example.com", "secret")
    app.library.show_library()


class TestReadingJourney:
    def test_sign_in_upgrade_and_read(self, app, backend):
        sign_in(app)
        assert app.storage.load()[1] == "tok-1"
        assert app.library.call_to_action(app.catalog_store.get_by_id("11")) == "upgrade"

        app.library.handle_item_selected("11")
        assert app.reader.state is ReaderState.DENIED
        app.main_window.confirm_upgrade.assert_called_once()
        assert app.session_manager.identity.is_vip

        app.library.handle_item_selected("11")
        assert app.reader.state is ReaderState.READY
        assert app.reader.content_reference == "https://cdn.test/11.pdf"

        app.reader.next_page()
        app.reader.next_page()

        assert app.catalog_store.get_by_id("11").last_read_page == 3
        synced = [call[2]["json"] for call in backend.calls_to("POST", "/user/reading-progress")]
        assert synced == [{"bookId": "11", "page": 2}, {"bookId": "11", "page": 3}]
        headers = backend.calls_to("POST", "/user/reading-progress")[0][2]["headers"]
        assert headers["Authorization"] == "Bearer tok-1"

    def test_rejected_password_is_not_a_forced_logout(self, app, backend):
        backend.routes[("POST", "/auth/login")] = (401, {"message": "Invalid email or password"})
        forced = []
        app.session_manager.login_required.connect(lambda: forced.append(True))

        assert not app.session_manager.establish_session("reader@example.com", "wrong")

        assert forced == []
        assert app.session_manager.last_failure is AuthFailure.INVALID_CREDENTIALS


class TestForcedLogout:
    """A 401 on any authenticated call clears the session everywhere."""

    def assert_signed_out(self, app):
        assert app.session_manager.identity is None
        assert app.session_manager.credential is None
        assert app.storage.load() is None
        app.main_window.prompt_login.assert_called()

    def test_rejected_progress_sync(self, app, backend):
        sign_in(app)
        app.library.handle_item_selected("10")
        assert app.reader.state is ReaderState.READY

        backend.revoked = True
        app.reader.next_page()

        self.assert_signed_out(app)
        assert app.reader.state is ReaderState.IDLE
        # Local write-through happened before the sync was rejected
        assert app.catalog_store.get_by_id("10").last_read_page == 2

    def test_rejected_catalog_delete(self, app, backend):
        sign_in(app)
        backend.revoked = True

        app.library.handle_item_deleted("10")

        self.assert_signed_out(app)
        assert app.catalog_store.get_by_id("10") is not None

    def test_rejected_catalog_load_falls_back_to_seed(self, app, backend):
        sign_in(app)
        backend.revoked = True

        app.catalog_store.load()

        self.assert_signed_out(app)
        assert app.catalog_store.using_fallback
        assert [item.id for item in app.catalog_store.items] == ["1", "2", "3", "4"]

    def test_after_logout_requests_carry_no_token(self, app, backend):
        sign_in(app)
        backend.revoked = True
        app.catalog_store.load()
        backend.calls.clear()

        app.catalog_store.load()

        assert "Authorization" not in backend.calls[0][2]["headers"]
        assert not app.catalog_store.using_fallback

    def test_write_failures_still_propagate(self, app, backend):
        sign_in(app)
        backend.revoked = True

        with pytest.raises(ApiError):
            app.catalog_store.delete("10")


class TestSignInFromMenu:
    def test_dialog_request_signs_in_and_reloads_actions(self, app, backend):
        app.library.show_library()
        assert app.library.call_to_action(app.catalog_store.get_by_id("10")) == "login"
        app.main_window.prompt_login.return_value = SignInRequest(
            SignInMode.PASSWORD, email="reader@example.com", password="secret"
        )

        app.library.handle_login_requested()

        assert app.session_manager.is_authenticated
        assert app.library.call_to_action(app.catalog_store.get_by_id("10")) == "read"
        app.main_window.show_error.assert_not_called()
