#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

import io

import pytest

from cgigate.http import Request, Response


def test_request_uri_and_host():
    req = Request("GET", "/a", query="b=1",
                  headers=[("HOST", "one"), ("HOST", "two")])
    assert req.uri == "/a?b=1"
    assert req.host == "two"
    assert req.get_header("host") == "two"
    assert req.get_header("missing") is None
    assert Request("GET", "/a").host == ""


def test_request_from_environ():
    body = io.BytesIO(b"hello")
    req = Request.from_environ({
        "REQUEST_METHOD": "POST",
        "PATH_INFO": "/something/x",
        "QUERY_STRING": "a=1",
        "SERVER_PROTOCOL": "HTTP/1.0",
        "SERVER_NAME": "ignored",
        "SERVER_PORT": "80",
        "HTTP_HOST": "localhost:1234",
        "HTTP_USER_AGENT": "curl/8.0",
        "CONTENT_TYPE": "text/plain",
        "CONTENT_LENGTH": "5",
        "REMOTE_ADDR": "10.0.0.1",
        "wsgi.url_scheme": "https",
        "wsgi.input": body,
    })
    assert req.method == "POST"
    assert req.path == "/something/x"
    assert req.query == "a=1"
    assert req.version == "HTTP/1.0"
    assert req.host == "localhost:1234"
    assert req.get_header("User-Agent") == "curl/8.0"
    assert req.get_header("Content-Type") == "text/plain"
    assert req.content_length == 5
    assert req.scheme == "https"
    assert req.remote_addr == "10.0.0.1"
    assert req.body is body


@pytest.mark.parametrize("environ, host, length", [
    ({"SERVER_NAME": "example.com", "SERVER_PORT": "8080"},
     "example.com:8080", None),
    ({"SERVER_NAME": "example.com", "CONTENT_LENGTH": ""},
     "example.com", None),
    ({"CONTENT_LENGTH": "abc"}, "", None),
    ({"CONTENT_LENGTH": "0"}, "", 0),
])
def test_request_from_environ_fallbacks(environ, host, length):
    req = Request.from_environ(environ)
    assert req.host == host
    assert req.content_length == length
    assert req.path == "/"
    assert req.method == "GET"


def test_response_status():
    resp = Response()
    assert resp.status is None
    resp.write_header(404)
    assert resp.status == "404 Not Found"
    with pytest.raises(AssertionError):
        resp.write_header(200)

    resp = Response()
    resp.write_header(299, "Custom")
    assert resp.status == "299 Custom"

    resp = Response()
    resp.write_header(299)
    assert resp.status == "299 Unknown"


def test_response_headers():
    resp = Response()
    resp.add_header("Status", "200")
    resp.add_header("Transfer-Encoding", "chunked")
    resp.add_header("Keep-Alive", "timeout=5")
    resp.add_header("X-Thing", "a")
    resp.add_header("Set-Cookie", "a=1")
    resp.add_header("Set-Cookie", "b=2")
    assert resp.headers == [
        ("X-Thing", "a"),
        ("Set-Cookie", "a=1"),
        ("Set-Cookie", "b=2"),
    ]


def test_response_write():
    resp = Response()
    resp.write(b"ab")
    resp.write(b"cd")
    assert resp.status_code == 200
    assert resp.body == b"abcd"
    assert resp.sent == 4
    with pytest.raises(TypeError):
        resp.write("text")


def test_response_error():
    resp = Response()
    resp.add_header("X-Thing", "a")
    resp.write_header(200)
    resp.write(b"partial")

    resp.error(500, "Internal Server Error")
    assert resp.status == "500 Internal Server Error"
    assert resp.body == b"Internal Server Error\n"
    assert resp.headers == [
        ("Content-Type", "text/plain; charset=utf-8"),
        ("X-Content-Type-Options", "nosniff"),
        ("Content-Length", "22"),
    ]
