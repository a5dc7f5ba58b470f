#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

import io
import os
import stat
import sys

from cgigate.config import Config
from cgigate.http import Request

SHEBANG = "#!%s\n" % sys.executable

# Mirrors the reference CGI executable: only GET and POST are allowed,
# POST bodies are echoed back, the query string is appended otherwise.
SOMETHING = SHEBANG + """\
import os
import sys

method = os.environ.get("REQUEST_METHOD", "")
me = method.lower()
if me not in ("get", "post"):
    sys.stdout.write("Status: 405\\n\\n")
    sys.exit(0)

qs = os.environ.get("QUERY_STRING", "")
b = "method was: " + method
if qs:
    b += "\\nquery string: " + qs

if me == "post":
    b = sys.stdin.read()

sys.stdout.write("Status: 200\\nContent-Type: text/plain\\n\\n" + b)
"""

# Misbehaves on demand, driven by the query string.
OTHERTHING = SHEBANG + """\
import os
import sys

qs = os.environ.get("QUERY_STRING", "")
if "error=1" in qs:
    sys.exit(1)
if "noheader=1" in qs:
    sys.exit(0)
if "status=" in qs:
    sys.stdout.write("Status: " + qs.split("=")[1] + "\\n")
sys.stdout.write("Content-Type: text/plain\\n\\n")
"""

ENV = SHEBANG + """\
import json
import os
import sys

sys.stdout.write("Status: 200\\r\\nContent-Type: application/json\\r\\n\\r\\n")
sys.stdout.write(json.dumps(dict(os.environ)))
"""

NO_SEPARATOR = SHEBANG + """\
import sys
sys.stdout.write("Status: 200\\n")
"""

NO_COLON = SHEBANG + """\
import sys
sys.stdout.write("Status: 200\\nthis is not a header\\n\\nbody")
"""

SLEEPY = SHEBANG + """\
import sys
import time
time.sleep(30)
sys.stdout.write("Status: 200\\n\\nawake")
"""

STDERR = SHEBANG + """\
import sys
sys.stderr.write("some diagnostics\\n")
sys.stderr.flush()
sys.stdout.write("Status: 200\\n\\nbody")
"""

REDIRECT = SHEBANG + """\
import sys
sys.stdout.write("Status: 302 Found\\nLocation: /elsewhere\\n"
                 "Content-Type: text/plain\\nConnection: close\\n\\n")
"""

DETACHED = SHEBANG + """\
import os
import time

if os.fork() == 0:
    os.setsid()
    time.sleep(10)
    os._exit(0)
time.sleep(30)
"""

SCRIPTS = {
    "something": SOMETHING,
    "otherthing": OTHERTHING,
    "env": ENV,
    "nosep": NO_SEPARATOR,
    "nocolon": NO_COLON,
    "sleepy": SLEEPY,
    "stderr": STDERR,
    "redirect": REDIRECT,
    "detached": DETACHED,
}


def write_script(path, source, mode=0o755):
    with open(path, "w") as f:
        f.write(source)
    os.chmod(path, mode)
    return path


def make_cgi_dir(root):
    cgi_dir = os.path.join(str(root), "cgi-bin")
    os.mkdir(cgi_dir)
    for name, source in SCRIPTS.items():
        write_script(os.path.join(cgi_dir, name), source)

    # not executable
    write_script(os.path.join(cgi_dir, "readonly"), SOMETHING,
                 mode=stat.S_IRUSR | stat.S_IWUSR)
    os.mkdir(os.path.join(cgi_dir, "subdir"))
    write_script(os.path.join(cgi_dir, "subdir", "nested"), SOMETHING)
    return cgi_dir


def make_config(cgi_dir, **settings):
    cfg = Config()
    cfg.set("cgi_dir", cgi_dir)
    for name, value in settings.items():
        cfg.set(name, value)
    return cfg


def make_request(path, method="GET", query="", body=None, host="",
                 scheme="http", headers=None, content_length=None):
    headers = list(headers or [])
    if host:
        headers.append(("HOST", host))
    if body is not None and content_length is None:
        content_length = len(body)
    return Request(
        method=method,
        path=path,
        query=query,
        version="HTTP/1.1",
        headers=headers,
        scheme=scheme,
        remote_addr="127.0.0.1",
        content_length=content_length,
        body=io.BytesIO(body) if body is not None else None,
    )
