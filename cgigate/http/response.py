#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

import http
import io

from cgigate import util


def reason_phrase(code):
    try:
        return http.HTTPStatus(code).phrase
    except ValueError:
        return "Unknown"


class Response:
    """Collects the status, headers and body of a gateway response.

    Nothing is streamed: the host reads ``status``, ``headers`` and
    ``body`` once the gateway returns.
    """

    def __init__(self):
        self.status_code = None
        self.reason = None
        self.headers = []
        self._body = io.BytesIO()

    @property
    def status(self):
        if self.status_code is None:
            return None
        return "%d %s" % (self.status_code, self.reason)

    @property
    def body(self):
        return self._body.getvalue()

    @property
    def sent(self):
        return self._body.tell()

    def add_header(self, name, value):
        lname = name.lower()
        # the status travels in the status line, never as a header
        if lname == "status":
            return
        if util.is_hoppish(name):
            return
        self.headers.append((name, value))

    def write_header(self, code, reason=None):
        if self.status_code is not None:
            raise AssertionError("Response status already set!")
        self.status_code = code
        self.reason = reason or reason_phrase(code)

    def write(self, data):
        if self.status_code is None:
            self.write_header(http.HTTPStatus.OK)
        if not isinstance(data, bytes):
            raise TypeError('%r is not a byte' % data)
        self._body.write(data)

    def error(self, code, mesg):
        """Replace anything set so far with a plain text error."""
        self.headers = []
        self.status_code = None
        self._body = io.BytesIO()
        body = util.to_bytestring("%s\n" % mesg)
        self.add_header("Content-Type", "text/plain; charset=utf-8")
        self.add_header("X-Content-Type-Options", "nosniff")
        self.add_header("Content-Length", str(len(body)))
        self.write_header(code)
        self.write(body)
