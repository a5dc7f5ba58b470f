#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

from cgigate import util


class Request:
    """The parts of an HTTP request the gateway reads.

    Header names are kept upper-cased with dashes, as in ``CONTENT-TYPE``.
    ``content_length`` is ``None`` when the request declares no length.
    """

    def __init__(self, method, path, query="", version="HTTP/1.1",
                 headers=None, scheme="http", remote_addr="",
                 content_length=None, body=None):
        self.method = method
        self.path = path
        self.query = query
        self.version = version
        self.headers = list(headers or [])
        self.scheme = scheme
        self.remote_addr = remote_addr
        self.content_length = content_length
        self.body = body

    def __repr__(self):
        return "<%s %s %s>" % (self.__class__.__name__, self.method, self.uri)

    @property
    def uri(self):
        if self.query:
            return "%s?%s" % (self.path, self.query)
        return self.path

    @property
    def host(self):
        return self.get_header("HOST") or ""

    def get_header(self, name):
        """Return the last value of header ``name``, or ``None``."""
        name = name.upper()
        value = None
        for hdr_name, hdr_value in self.headers:
            if hdr_name == name:
                value = hdr_value
        return value

    @classmethod
    def from_environ(cls, environ):
        """Build a request from a WSGI environ."""
        headers = []
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                headers.append((key[5:].replace("_", "-"), value))
            elif key in ("CONTENT_TYPE", "CONTENT_LENGTH") and value:
                headers.append((key.replace("_", "-"), value))

        if "HTTP_HOST" not in environ and environ.get("SERVER_NAME"):
            host = environ["SERVER_NAME"]
            port = environ.get("SERVER_PORT")
            if port:
                host = "%s:%s" % (host, port)
            headers.append(("HOST", host))

        try:
            content_length = int(environ.get("CONTENT_LENGTH") or "")
        except ValueError:
            content_length = None

        return cls(
            method=environ.get("REQUEST_METHOD", "GET"),
            path=util.wsgi_to_str(environ.get("PATH_INFO") or "/"),
            query=util.wsgi_to_str(environ.get("QUERY_STRING", "")),
            version=environ.get("SERVER_PROTOCOL", "HTTP/1.0"),
            headers=headers,
            scheme=environ.get("wsgi.url_scheme", "http"),
            remote_addr=environ.get("REMOTE_ADDR", ""),
            content_length=content_length,
            body=environ.get("wsgi.input"),
        )
