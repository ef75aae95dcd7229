"""End-to-end tests for the HTTP server."""

import http.client
import json
import threading
import urllib.error
import urllib.request

import pytest

from resumebot import server


@pytest.fixture
def base_url(tmp_path):
    (tmp_path / "index.html").write_text("<h1>ResumeBot</h1>", encoding="utf-8")
    httpd = server.create_server(0, host="127.0.0.1", static_dir=tmp_path)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()


def post(url, body):
    data = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    request = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"})
    try:
        with urllib.request.urlopen(request) as response:
            return response.status, json.loads(response.read())
    except urllib.error.HTTPError as e:
        return e.code, json.loads(e.read())


def test_serves_static_files(base_url):
    with urllib.request.urlopen(f"{base_url}/index.html") as response:
        assert response.status == 200
        assert b"ResumeBot" in response.read()
        assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_unknown_post_route(base_url):
    status, payload = post(f"{base_url}/api/nothing", {"a": 1})
    assert status == 404
    assert payload == {"error": "Not found"}


def test_invalid_json_body(base_url):
    status, payload = post(f"{base_url}/api/git-log", b"{not json")
    assert status == 400
    assert payload["error"] == "Invalid JSON"


def test_non_object_body(base_url):
    status, _ = post(f"{base_url}/api/git-log", [1, 2])
    assert status == 400


def test_git_log_validation(base_url, tmp_path):
    status, payload = post(f"{base_url}/api/git-log", {"repoPath": str(tmp_path), "author": "a"})
    assert status == 400
    assert "error" in payload


def test_routes_dispatch_to_api(base_url, monkeypatch):
    monkeypatch.setitem(
        server.ROUTES, "/api/analyze-resume", lambda body: ({"echo": body["commits"]}, 200)
    )
    status, payload = post(f"{base_url}/api/analyze-resume?x=1", {"commits": [1]})
    assert status == 200
    assert payload == {"echo": [1]}


def test_unexpected_errors_become_500(base_url, monkeypatch):
    def boom(body):
        raise RuntimeError("kaboom")

    monkeypatch.setitem(server.ROUTES, "/api/git-log", boom)
    status, payload = post(f"{base_url}/api/git-log", {"repoPath": "x"})
    assert status == 500
    assert payload == {"error": "kaboom"}


def test_non_numeric_content_length(base_url):
    host, port = base_url.removeprefix("http://").split(":")
    conn = http.client.HTTPConnection(host, int(port))
    try:
        conn.putrequest("POST", "/api/git-log")
        conn.putheader("Content-Type", "application/json")
        conn.putheader("Content-Length", "abc")
        conn.endheaders(b"{}")
        response = conn.getresponse()
        assert response.status == 400
        assert json.loads(response.read()) == {"error": "Invalid Content-Length"}
    finally:
        conn.close()
