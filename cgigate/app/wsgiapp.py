#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

import sys

import gunicorn.app.base

from cgigate import SERVER
from cgigate.config import Config
from cgigate.errors import ConfigError
from cgigate.gateway import Gateway, init
from cgigate.http import Request, Response

# extra seconds granted to gunicorn workers over the script timeout
WORKER_TIMEOUT_MARGIN = 5


class CGIGateway:
    """WSGI application serving the CGI scripts of a configured directory."""

    def __init__(self, cfg, log=None):
        self.cfg = cfg
        self.gateway = Gateway(cfg, log=log)

    def __call__(self, environ, start_response):
        req = Request.from_environ(environ)
        resp = Response()
        self.gateway.serve(resp, req)
        start_response(resp.status, resp.headers)
        return [resp.body]


def make_app(global_conf, **local_conf):
    """Paste Deploy app factory.

    ``cgi_dir`` is required. ``__name__`` names the served domain in the
    logs.
    """
    conf = {}
    for k, v in global_conf.items():
        conf[k.upper()] = v
    for k, v in local_conf.items():
        conf[k.upper()] = v
    domain = global_conf.get("__name__") or "cgigate"
    return CGIGateway(init(domain, conf))


class CGIApplication(gunicorn.app.base.BaseApplication):
    """Hosts a ``CGIGateway`` in gunicorn."""

    def __init__(self, cgi_cfg):
        self.cgi_cfg = cgi_cfg
        super().__init__()

    def options(self):
        cgi_cfg = self.cgi_cfg
        timeout = cgi_cfg.timeout
        if timeout:
            timeout += WORKER_TIMEOUT_MARGIN
        return {
            "bind": cgi_cfg.bind,
            "workers": cgi_cfg.workers,
            "timeout": timeout,
            "loglevel": cgi_cfg.loglevel,
            "errorlog": cgi_cfg.errorlog,
            "logconfig": cgi_cfg.logconfig,
            "proc_name": SERVER,
        }

    def load_config(self):
        config = {key: value for key, value in self.options().items()
                  if key in self.cfg.settings and value is not None}
        for key, value in config.items():
            self.cfg.set(key.lower(), value)

    def load(self):
        return CGIGateway(self.cgi_cfg)


def run(argv=None):
    """\
    The ``cgigate`` command line runner for serving a directory of CGI
    scripts.
    """
    parser = Config(usage="%(prog)s [OPTIONS]").parser()
    args = parser.parse_args(argv)

    conf = {k.upper(): v for k, v in vars(args).items() if v is not None}
    try:
        cfg = init(parser.prog, conf)
    except ConfigError as e:
        sys.stderr.write("\nError: %s\n\n" % e)
        sys.stderr.flush()
        sys.exit(1)

    CGIApplication(cfg).run()


if __name__ == '__main__':
    run()
