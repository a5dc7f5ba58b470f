#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

"""
CGI gateway

Runs one CGI script per request: the request path selects the script, the
request becomes its environment and standard input, and its output
becomes the response.
"""

import datetime
import http

from cgigate.cgi import environ, parser, process
from cgigate.cgi.errors import (
    BodyReadError,
    CGIException,
    InvalidCGIResponse,
    ScriptExecError,
    ScriptTimeout,
)
from cgigate.config import Config
from cgigate.errors import ConfigError, InvalidSetting, MissingConfig, \
    MissingSetting
from cgigate.glogging import Logger

# messages sent to clients; details only go to the error log
ERROR_MESSAGES = {
    http.HTTPStatus.BAD_REQUEST: "Bad Request",
    http.HTTPStatus.NOT_FOUND: "Not Found",
    http.HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}


def init(domain, conf):
    """Validate ``conf`` and return the ``Config`` to serve ``domain`` with.

    ``conf`` maps setting names to values, ``CGI_DIR`` being required. Keys
    are matched case-insensitively against the known settings and the
    others are ignored. Raises a ``ConfigError`` subclass when the
    configuration can't be used.
    """
    if conf is None:
        raise MissingConfig()

    if "CGI_DIR" not in conf:
        raise MissingSetting("CGI_DIR")

    cgi_dir = conf["CGI_DIR"]
    if not isinstance(cgi_dir, str):
        raise InvalidSetting("CGI_DIR", cgi_dir)

    cfg = Config(prog=domain)
    for k, v in conf.items():
        name = k.lower()
        # Ignore unknown names
        if name not in cfg.settings:
            continue
        try:
            cfg.set(name, v)
        except ConfigError:
            raise
        except (TypeError, ValueError):
            raise InvalidSetting(k, v)

    log = Logger(cfg)
    log.info("Serving CGI scripts for %s from %s", domain, cfg.cgi_dir)
    return cfg


def serve(resp, req, cfg):
    """Serve ``req`` into the response sink ``resp``.

    ``cfg`` is the configuration returned by ``init()``. Every outcome,
    errors included, is written to ``resp``.
    """
    Gateway(cfg).serve(resp, req)


class Gateway:

    def __init__(self, cfg, log=None):
        self.cfg = cfg
        self.log = log if log is not None else Logger(cfg, configure=False)

    def serve(self, resp, req):
        start = datetime.datetime.now()
        meta = None
        try:
            meta = environ.create(req, self.cfg)
            self.handle(resp, req, meta)
        except BodyReadError as e:
            self.log.info("%s", e)
            self.handle_error(resp, e.code)
        except ScriptTimeout as e:
            self.log.warning("%s", e)
            self.handle_error(resp, e.code)
        except ScriptExecError as e:
            self.log.error("%s", e)
            if e.output:
                self.log.debug("Script output: %r", e.output)
            self.handle_error(resp, e.code)
        except CGIException as e:
            self.log.error("%s %s: %s", req.method, req.path, e)
            self.handle_error(resp, e.code)
        finally:
            request_time = datetime.datetime.now() - start
            self.log.access(resp, req, meta, request_time)

    def handle(self, resp, req, meta):
        if not meta["SCRIPT_NAME"]:
            self.log.debug("No script for %s", req.path)
            self.handle_error(resp, http.HTTPStatus.NOT_FOUND)
            return

        body = self.read_body(req)
        output = process.run_script(
            meta, body,
            timeout=self.cfg.script_timeout,
            merge_stderr=self.cfg.merge_stderr,
        )

        result = parser.parse_response(output)
        if not result.headers:
            raise InvalidCGIResponse("empty header block")
        code, reason = parser.parse_status(result.headers)

        resp.write_header(code, reason)
        for name, value in result.headers.items():
            resp.add_header(name, value)
        resp.write(result.body)

    def read_body(self, req):
        length = req.content_length
        if not length or length <= 0 or req.body is None:
            return None

        try:
            body = req.body.read(length)
        except OSError as e:
            raise BodyReadError(str(e))

        if len(body) < length:
            raise BodyReadError("got %d of %d bytes" % (len(body), length))
        return body

    def handle_error(self, resp, code):
        code = http.HTTPStatus(code)
        resp.error(code, ERROR_MESSAGES.get(code, code.phrase))
