#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

from cgigate import GATEWAY_INTERFACE
from cgigate.cgi.errors import AmbiguousHost, UnknownScheme, InvalidPort
from cgigate.cgi.resolver import find_script

# request headers passed on as meta variables when present
FORWARDED_HEADERS = (
    "Auth-Type",
    "Remote-User",
    "Content-Type",
    "Server-Software",
)

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
}


def header_environ(req, cfg):
    environ = {}
    for hdr_name in FORWARDED_HEADERS:
        hdr_value = req.get_header(hdr_name)
        if hdr_value:
            environ[hdr_name.upper().replace("-", "_")] = hdr_value

    if "SERVER_SOFTWARE" not in environ and cfg.server_software:
        environ["SERVER_SOFTWARE"] = cfg.server_software
    return environ


def server_name(host):
    return host.split(":")[0].lower()


def server_port(host, scheme):
    parts = host.split(":")
    if len(parts) > 2:
        raise AmbiguousHost(host)

    if len(parts) == 2:
        port = parts[1]
        if not port.isdigit():
            raise InvalidPort(port)
        return int(port)

    try:
        return DEFAULT_PORTS[scheme]
    except KeyError:
        raise UnknownScheme(scheme)


def create(req, cfg):
    """Build the CGI meta variables for ``req``.

    ``SCRIPT_NAME`` is empty when no script matches the request path.
    Raises ``AmbiguousHost``, ``InvalidPort`` or ``UnknownScheme`` when no
    server port can be worked out from the request.
    """
    environ = header_environ(req, cfg)

    script_path, path_info = find_script(cfg.cgi_dir, req.path)
    path_translated = ""
    if path_info:
        path_translated = cfg.cgi_dir + path_info

    content_length = req.content_length
    if content_length is None:
        content_length = 0

    host = req.host
    environ.update({
        "CONTENT_LENGTH": str(content_length),
        "GATEWAY_INTERFACE": GATEWAY_INTERFACE,
        "PATH_INFO": path_info,
        "PATH_TRANSLATED": path_translated,
        "SCRIPT_NAME": script_path,
        "QUERY_STRING": req.query,
        "REMOTE_ADDR": req.remote_addr,
        "REQUEST_METHOD": req.method,
        "SERVER_NAME": server_name(host),
        "SERVER_PORT": str(server_port(host, req.scheme)),
        "SERVER_PROTOCOL": req.version,
    })
    return environ
