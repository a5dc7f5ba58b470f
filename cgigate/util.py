#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

import os
import sys

# Hop-by-hop headers may not be set by a WSGI application, so the ones a
# script emits are dropped. Server and Date belong to the host server.
hop_headers = set("""
    connection keep-alive proxy-authenticate proxy-authorization
    te trailers transfer-encoding upgrade
    server date
    """.split())


def sys_argv0():
    try:
        return sys.argv[0]
    except IndexError:
        return "cgigate"


def parse_address(netloc, default_port='8000'):
    if netloc.startswith("unix://"):
        return netloc.split("unix://")[1]

    if netloc.startswith("unix:"):
        return netloc.split("unix:")[1]

    # get host
    if '[' in netloc and ']' in netloc:
        host = netloc.split(']')[0][1:]
    elif ':' in netloc:
        host = netloc.split(':')[0]
    elif netloc == "":
        host = "0.0.0.0"
    else:
        host = netloc.lower()

    # get port
    netloc = netloc.split(']')[-1]
    if ":" in netloc:
        port = netloc.split(':', 1)[1]
        if not port.isdigit():
            raise RuntimeError("%r is not a valid port number." % port)
        port = int(port)
    else:
        port = int(default_port)
    return (host, port)


def is_hoppish(header):
    return header.lower().strip() in hop_headers


def is_subpath(path, root):
    """Return True if ``path`` lies strictly inside the directory ``root``.

    Both paths are canonicalized first, so symbolic links and ``..``
    segments are followed before comparing.
    """
    path = os.path.realpath(path)
    root = os.path.realpath(root)
    if path == root:
        return False
    return os.path.commonpath([path, root]) == root


def check_is_writable(path):
    try:
        with open(path, 'a') as f:
            f.close()
    except OSError as e:
        raise RuntimeError("Error: '%s' isn't writable [%r]" % (path, e))


def bytes_to_str(b):
    if isinstance(b, str):
        return b
    return str(b, 'latin1')


def wsgi_to_str(value):
    """Undo the latin-1 decoding WSGI applies to the request path.

    Bytes that are not UTF-8 survive as surrogates and are restored when
    the value is handed to a subprocess environment.
    """
    try:
        raw = value.encode("latin-1")
    except UnicodeEncodeError:
        # already decoded by a non conforming host
        return value
    return raw.decode("utf-8", "surrogateescape")


def to_bytestring(value, encoding="utf8"):
    """Converts a string argument to a byte string"""
    if isinstance(value, bytes):
        return value
    if not isinstance(value, str):
        raise TypeError('%r is not a string' % value)

    return value.encode(encoding)
