#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

import collections

from cgigate import util
from cgigate.cgi.errors import (
    InvalidCGIResponse,
    InvalidStatus,
    MalformedHeader,
    MissingStatus,
)

CGIResponse = collections.namedtuple("CGIResponse", ["headers", "body"])


def parse_response(output):
    """Split raw script output into its headers and body.

    Header lines run up to the first empty line (``\\n`` or ``\\r\\n``),
    the body is everything after it, untouched. Header names keep their
    case; a repeated name keeps the last value.
    """
    headers = {}
    start = 0
    while True:
        end = output.find(b"\n", start)
        if end < 0:
            raise InvalidCGIResponse()

        line = output[start:end]
        if line in (b"", b"\r"):
            return CGIResponse(headers, output[end + 1:])

        name, sep, value = util.bytes_to_str(line).partition(":")
        name = name.strip()
        if not sep or not name:
            raise MalformedHeader(util.bytes_to_str(line))
        headers[name] = value.strip()
        start = end + 1


def parse_status(headers):
    """Return the ``(code, reason)`` carried by the ``Status`` header.

    The value is a three digit code optionally followed by a reason
    phrase, as in ``404 Not Found``.
    """
    try:
        status = headers["Status"]
    except KeyError:
        raise MissingStatus()

    code, _, reason = status.partition(" ")
    if len(code) != 3 or not code.isascii() or not code.isdigit():
        raise InvalidStatus(status)
    code = int(code)
    if not 100 <= code <= 599:
        raise InvalidStatus(status)
    return code, reason.strip() or None
