#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

import pytest

from cgigate.cgi.errors import (
    InvalidCGIResponse,
    InvalidStatus,
    MalformedHeader,
    MissingStatus,
)
from cgigate.cgi.parser import parse_response, parse_status


def test_parse_ok():
    res = parse_response(b"Status: 200\nContent-Type: text/plain\n\nhello")
    assert res.headers == {"Status": "200", "Content-Type": "text/plain"}
    assert res.body == b"hello"


def test_parse_crlf():
    res = parse_response(b"Status: 201\r\nX-Thing:  a b \r\n\r\nbody\r\n")
    assert res.headers == {"Status": "201", "X-Thing": "a b"}
    assert res.body == b"body\r\n"


def test_parse_empty_body():
    res = parse_response(b"Status: 204\n\n")
    assert res.headers == {"Status": "204"}
    assert res.body == b""


def test_body_kept_as_is():
    body = b"\x00\xff\n\nStatus: 500\n\n\r\n"
    res = parse_response(b"Status: 200\n\n" + body)
    assert res.body == body


def test_header_value_with_colon():
    res = parse_response(b"Location: http://example.com:8080/\n\n")
    assert res.headers["Location"] == "http://example.com:8080/"


def test_repeated_header_keeps_last():
    res = parse_response(b"X-A: 1\nX-A: 2\n\n")
    assert res.headers == {"X-A": "2"}


def test_empty_header_block():
    res = parse_response(b"\nbody")
    assert res.headers == {}
    assert res.body == b"body"


@pytest.mark.parametrize("output", [
    b"",
    b"Status: 200",
    b"Status: 200\n",
    b"Status: 200\nContent-Type: text/plain\n",
])
def test_no_end_of_headers(output):
    with pytest.raises(InvalidCGIResponse):
        parse_response(output)


@pytest.mark.parametrize("output", [
    b"this is not a header\n\n",
    b": no name\n\n",
])
def test_malformed_header(output):
    with pytest.raises(MalformedHeader) as err:
        parse_response(output)
    assert err.value.code == 500


@pytest.mark.parametrize("status, expected", [
    ("200", (200, None)),
    ("404 Not Found", (404, "Not Found")),
    ("302   Found ", (302, "Found")),
    ("100", (100, None)),
    ("599 Custom", (599, "Custom")),
])
def test_parse_status(status, expected):
    assert parse_status({"Status": status}) == expected


@pytest.mark.parametrize("status", [
    "bla", "", "20", "2000", "099", "600", "-10", "२००", "20a",
])
def test_invalid_status(status):
    with pytest.raises(InvalidStatus):
        parse_status({"Status": status})


def test_missing_status():
    with pytest.raises(MissingStatus):
        parse_status({"Content-Type": "text/plain"})

    # the header name is matched exactly
    with pytest.raises(MissingStatus):
        parse_status({"status": "200"})


@pytest.mark.parametrize("head, body", [
    (b"Status: 200\n\n", b"body"),
    (b"Status: 200\r\nA: b\r\n\r\n", b"\r\nbody\n\n"),
    (b"A: 1\n\r\n", b"B: 2\n\n"),
    (b"\n", b""),
])
def test_lossless(head, body):
    # the body starts right after the first blank line
    res = parse_response(head + body)
    assert res.body == body
    assert head.count(b"\n") == len(res.headers) + 1
