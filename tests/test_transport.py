"""Tests for transport adapters and the urllib client."""

from __future__ import annotations

import http.client
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from types import SimpleNamespace
from urllib.parse import urlsplit

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from sparql_protocol import SparqlClient, TransportError, UnsupportedBackendError
from sparql_protocol.transport import (
    BackendResponse,
    ExecuteAdapter,
    StatefulAdapter,
    TransportBackend,
    UrllibHttpClient,
    adapt_backend,
    build_backend,
)

COUNT_JSON = (
    b'{"head": {"vars": ["count"]}, "results": {"bindings": '
    b'[{"count": {"type": "literal", "value": "7"}}]}}'
)


# ── Fakes ──────────────────────────────────────────────────────


class FakeSession:
    """Execute-style client returning a prepared requests.Response."""

    def __init__(self, status=200, headers=None, content=b"", exc=None):
        self.status = status
        self.headers = headers or {}
        self.content = content
        self.exc = exc
        self.kwargs = None

    def request(self, method, url, **kwargs):
        self.kwargs = dict(kwargs, method=method, url=url)
        if self.exc:
            raise self.exc
        resp = requests.Response()
        resp.status_code = self.status
        resp.headers = CaseInsensitiveDict(self.headers)
        resp._content = self.content
        resp.reason = "OK"
        return resp


class RecordingStateful:
    def __init__(self, response=None, exc=None):
        self.calls = []
        self.response = response
        self.exc = exc

    def reset_parameters(self):
        self.calls.append(("reset",))

    def set_method(self, method):
        self.calls.append(("method", method))

    def set_uri(self, uri):
        self.calls.append(("uri", uri))

    def set_header(self, name, value):
        self.calls.append(("header", name, value))

    def set_raw_data(self, data):
        self.calls.append(("data", data))

    def request(self):
        if self.exc:
            raise self.exc
        return self.response


# ── Adapter selection ──────────────────────────────────────────


class TestAdaptBackend:
    def test_backend_passes_through(self):
        class Native:
            def execute(self, method, uri, headers, body=None):
                return BackendResponse(status=200)

        native = Native()
        assert adapt_backend(native) is native
        assert isinstance(native, TransportBackend)

    def test_session_gets_execute_adapter(self):
        assert isinstance(adapt_backend(requests.Session(), timeout=5), ExecuteAdapter)

    def test_stateful_checked_before_execute_style(self):
        """Both shapes have request(); set_* methods decide."""
        assert isinstance(adapt_backend(RecordingStateful()), StatefulAdapter)
        assert isinstance(adapt_backend(UrllibHttpClient()), StatefulAdapter)

    def test_unknown_shape(self):
        with pytest.raises(UnsupportedBackendError):
            adapt_backend("not a client")

    def test_stateful_shape_needs_reset(self):
        """set_* methods without reset_parameters() are not silently treated as execute-style."""

        class NoReset:
            def set_method(self, method): ...

            def set_uri(self, uri): ...

            def set_header(self, name, value): ...

            def set_raw_data(self, data): ...

            def request(self): ...

        with pytest.raises(UnsupportedBackendError, match="reset_parameters"):
            adapt_backend(NoReset())

    def test_build_backend_by_name(self):
        assert isinstance(build_backend("requests", timeout=3, user_agent="t"), ExecuteAdapter)
        assert isinstance(build_backend("urllib", timeout=3, user_agent="t"), StatefulAdapter)
        with pytest.raises(UnsupportedBackendError):
            build_backend("curl", timeout=3, user_agent="t")


class TestExecuteAdapter:
    def test_normalises_response_and_disables_redirects(self):
        session = FakeSession(302, {"location": "http://b/"}, b"moved")
        adapter = ExecuteAdapter(session, timeout=12)

        resp = adapter.execute("GET", "http://a/", {"Accept": "text/turtle"})

        assert session.kwargs["allow_redirects"] is False
        assert session.kwargs["timeout"] == 12
        assert session.kwargs["headers"] == {"Accept": "text/turtle"}
        assert resp.status == 302
        assert resp.header("Location") == "http://b/"
        assert resp.body == b"moved"
        assert not resp.is_successful

    def test_connection_error_becomes_transport_error(self):
        adapter = ExecuteAdapter(FakeSession(exc=requests.ConnectionError("refused")))

        with pytest.raises(TransportError) as exc_info:
            adapter.execute("GET", "http://a/", {})
        assert exc_info.value.uri == "http://a/"


class TestStatefulAdapter:
    def test_configures_one_step_at_a_time(self):
        client = RecordingStateful(SimpleNamespace(status=201, headers={"X-A": "1"}, body=b"ok"))
        adapter = StatefulAdapter(client)

        resp = adapter.execute("POST", "http://a/", {"Accept": "a/b", "Content-Type": "c/d"}, b"data")

        assert client.calls == [
            ("reset",),
            ("method", "POST"),
            ("uri", "http://a/"),
            ("header", "Accept", "a/b"),
            ("header", "Content-Type", "c/d"),
            ("data", b"data"),
        ]
        assert resp.status == 201
        assert resp.header("x-a") == "1"

    def test_os_error_becomes_transport_error(self):
        adapter = StatefulAdapter(RecordingStateful(exc=ConnectionRefusedError()))

        with pytest.raises(TransportError):
            adapter.execute("GET", "http://a/", {})

    def test_http_exception_becomes_transport_error(self):
        adapter = StatefulAdapter(RecordingStateful(exc=http.client.IncompleteRead(b"partial", 10)))

        with pytest.raises(TransportError) as exc_info:
            adapter.execute("GET", "http://a/", {})
        assert exc_info.value.uri == "http://a/"


# ── urllib client against a local server ───────────────────────


class _Handler(BaseHTTPRequestHandler):
    def log_message(self, format, *args):  # noqa: A002
        pass

    def _reply(self, status, body=b"", content_type="text/plain", location=None):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        if location:
            self.send_header("Location", location)
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        path = urlsplit(self.path).path
        if path == "/sparql":
            self._reply(200, COUNT_JSON, "application/sparql-results+json")
        elif path == "/moved":
            self._reply(302, location="/sparql")
        else:
            self._reply(500, b"server exploded")

    def do_POST(self):
        body = self.rfile.read(int(self.headers.get("Content-Length", 0)))
        self.server.received.append((self.path, self.headers.get("Content-Type"), body))
        self._reply(204)


@pytest.fixture(autouse=True)
def _no_proxy(monkeypatch):
    """urllib reads proxy settings when the opener is built."""
    for var in ("http_proxy", "HTTP_PROXY", "https_proxy", "HTTPS_PROXY", "all_proxy", "ALL_PROXY"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    httpd.received = []
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield httpd
    httpd.shutdown()
    httpd.server_close()


def _base(httpd) -> str:
    host, port = httpd.server_address[:2]
    return f"http://{host}:{port}"


class TestUrllibHttpClient:
    def test_redirect_is_returned_not_followed(self, server):
        client = UrllibHttpClient(timeout=5)
        client.set_method("GET")
        client.set_uri(f"{_base(server)}/moved")

        resp = client.request()

        assert resp.status == 302
        assert resp.header("Location") == "/sparql"

    def test_error_status_is_a_response(self, server):
        client = UrllibHttpClient(timeout=5)
        client.set_uri(f"{_base(server)}/broken")

        resp = client.request()

        assert resp.status == 500
        assert resp.body == b"server exploded"

    def test_requires_uri(self):
        with pytest.raises(ValueError):
            UrllibHttpClient().request()

    def test_connection_refused(self):
        sock = socket.socket()
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
        sock.close()

        client = UrllibHttpClient(timeout=2)
        client.set_uri(f"http://127.0.0.1:{port}/sparql")

        with pytest.raises(TransportError):
            client.request()

    def test_protocol_client_follows_redirect(self, server):
        """End to end: 302 to a relative path, then a parsed count."""
        client = SparqlClient(f"{_base(server)}/moved", http_client=UrllibHttpClient(timeout=5), namespaces={})

        assert client.count_triples() == 7
        assert client.query_uri == f"{_base(server)}/sparql"

    def test_protocol_client_update(self, server):
        client = SparqlClient(f"{_base(server)}/sparql", http_client=UrllibHttpClient(timeout=5), namespaces={})

        resp = client.clear("all")

        assert resp.status == 204
        assert server.received == [("/sparql", "application/sparql-update", b"CLEAR all")]


# ── urllib client against a misbehaving raw socket ─────────────


@pytest.fixture
def raw_server():
    """Serve one connection: read the request head, write ``payload`` verbatim, close."""
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    sock.settimeout(5)

    def start(payload: bytes) -> str:
        def serve():
            conn, _ = sock.accept()
            with conn:
                data = b""
                while b"\r\n\r\n" not in data:
                    chunk = conn.recv(4096)
                    if not chunk:
                        break
                    data += chunk
                conn.sendall(payload)

        threading.Thread(target=serve, daemon=True).start()
        host, port = sock.getsockname()
        return f"http://{host}:{port}/sparql"

    yield start
    sock.close()


class TestMalformedResponses:
    """Broken HTTP framing surfaces as TransportError, never a raw http.client error."""

    def test_garbage_status_line(self, raw_server):
        uri = raw_server(b"garbage\r\n\r\n")
        client = SparqlClient(uri, http_client=UrllibHttpClient(timeout=5), namespaces={})

        with pytest.raises(TransportError) as exc_info:
            client.query("ASK {?s ?p ?o}")
        assert isinstance(exc_info.value.__cause__, http.client.HTTPException)
        assert exc_info.value.uri.startswith(uri)

    def test_truncated_body(self, raw_server):
        uri = raw_server(
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: application/sparql-results+json\r\n"
            b"Content-Length: 500\r\n"
            b"Connection: close\r\n\r\n"
            b'{"head"'
        )
        client = SparqlClient(uri, http_client=UrllibHttpClient(timeout=5), namespaces={})

        with pytest.raises(TransportError) as exc_info:
            client.query("ASK {?s ?p ?o}")
        assert isinstance(exc_info.value.__cause__, http.client.IncompleteRead)
