#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

import logging
logging.Logger.manager.emittedNoHandlerWarning = 1  # noqa
from logging.config import fileConfig
import os
import sys
import time
import traceback

from cgigate import util


class SafeAtoms(dict):

    def __init__(self, atoms):
        dict.__init__(self)
        for key, value in atoms.items():
            if isinstance(value, str):
                self[key] = value.replace('"', '\\"')
            else:
                self[key] = value

    def __getitem__(self, k):
        if k.startswith("{"):
            kl = k.lower()
            if kl in self:
                return super().__getitem__(kl)
            else:
                return "-"
        if k in self:
            return super().__getitem__(k)
        else:
            return '-'


class Logger:

    LOG_LEVELS = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG
    }
    loglevel = logging.INFO

    error_fmt = r"%(asctime)s [%(process)d] [%(levelname)s] %(message)s"
    datefmt = r"[%Y-%m-%d %H:%M:%S %z]"

    access_fmt = "%(message)s"

    def __init__(self, cfg, configure=True):
        self.error_log = logging.getLogger("cgigate.error")
        self.error_log.propagate = False
        self.access_log = logging.getLogger("cgigate.access")
        self.access_log.propagate = False
        self.cfg = cfg
        if configure:
            self.setup(cfg)
        else:
            self.loglevel = self.error_log.getEffectiveLevel()

    def setup(self, cfg):
        self.loglevel = self.LOG_LEVELS.get(cfg.loglevel.lower(), logging.INFO)
        self.error_log.setLevel(self.loglevel)
        self.access_log.setLevel(logging.INFO)

        # set cgigate.error handler
        self._set_handler(
            self.error_log, cfg.errorlog,
            logging.Formatter(self.error_fmt, self.datefmt))

        # set cgigate.access handler
        if cfg.accesslog is not None:
            self._set_handler(
                self.access_log, cfg.accesslog,
                fmt=logging.Formatter(self.access_fmt), stream=sys.stdout
            )

        if cfg.logconfig:
            if os.path.exists(cfg.logconfig):
                defaults = {
                    "__file__": cfg.logconfig,
                    "here": os.path.dirname(cfg.logconfig),
                }
                fileConfig(cfg.logconfig, defaults=defaults,
                           disable_existing_loggers=False)
            else:
                msg = "Error: log config '%s' not found"
                raise RuntimeError(msg % cfg.logconfig)

    def error(self, msg, *args, **kwargs):
        self.error_log.error(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self.error_log.warning(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self.error_log.info(msg, *args, **kwargs)

    def debug(self, msg, *args, **kwargs):
        self.error_log.debug(msg, *args, **kwargs)

    def atoms(self, resp, req, meta, request_time):
        """ Gets atoms for log formatting.
        """
        status = resp.status
        if isinstance(status, str):
            status = status.split(None, 1)[0]
        atoms = {
            'h': req.remote_addr or '-',
            'l': '-',
            'u': req.get_header("REMOTE-USER") or '-',
            't': self.now(),
            'r': "%s %s %s" % (req.method, req.uri, req.version),
            's': status,
            'm': req.method,
            'U': req.path,
            'q': req.query,
            'H': req.version,
            'b': str(resp.sent),
            'B': resp.sent,
            'f': req.get_header("REFERER") or '-',
            'a': req.get_header("USER-AGENT") or '-',
            'T': request_time.seconds,
            'D': (request_time.seconds * 1000000) + request_time.microseconds,
            'L': "%d.%06d" % (request_time.seconds, request_time.microseconds),
            'p': "<%s>" % os.getpid()
        }

        # add request headers
        atoms.update({"{%s}i" % k.lower(): v for k, v in req.headers})

        # add response headers
        atoms.update({"{%s}o" % k.lower(): v for k, v in resp.headers})

        # add meta variables
        if meta:
            atoms.update({"{%s}e" % k.lower(): v for k, v in meta.items()})

        return atoms

    def access(self, resp, req, meta, request_time):
        """ See http://httpd.apache.org/docs/2.0/logs.html#combined
        for format details
        """

        if not (self.cfg.accesslog or self.cfg.logconfig):
            return

        # wrap atoms:
        # - make sure atoms will be test case insensitively
        # - if atom doesn't exist replace it by '-'
        safe_atoms = SafeAtoms(self.atoms(resp, req, meta, request_time))

        try:
            self.access_log.info(self.cfg.access_log_format, safe_atoms)
        except Exception:
            self.error(traceback.format_exc())

    def now(self):
        """ return date in Apache Common Log Format """
        return time.strftime('[%d/%b/%Y:%H:%M:%S %z]')

    def _get_cgigate_handler(self, log):
        for h in log.handlers:
            if getattr(h, "_cgigate", False):
                return h

    def _set_handler(self, log, output, fmt, stream=None):
        # remove previous cgigate log handler
        h = self._get_cgigate_handler(log)
        if h:
            log.handlers.remove(h)

        if output is not None:
            if output == "-":
                h = logging.StreamHandler(stream)
            else:
                util.check_is_writable(output)
                h = logging.FileHandler(output)

            h.setFormatter(fmt)
            h._cgigate = True
            log.addHandler(h)

