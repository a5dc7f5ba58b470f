#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

import collections
import logging
import os

from cgigate import util

log = logging.getLogger("cgigate.error")


ResolvedPath = collections.namedtuple("ResolvedPath",
                                      ["script_path", "path_info"])


def find_script(cgi_dir, path):
    """Split a URL path into the script it names and its path info.

    The path segments are walked in order against ``cgi_dir``: as long as
    the next segment exists on disk the script prefix grows, the first
    missing segment and everything after it become ``path_info``. When no
    segment exists, or the walk ends somewhere that isn't a file inside
    ``cgi_dir``, the script path is empty.
    """
    segments = path.split("/")
    script_path = cgi_dir
    path_info = ""
    for i, segment in enumerate(segments):
        if not segment:
            continue
        candidate = script_path + os.sep + segment
        if os.path.exists(candidate):
            script_path = candidate
            continue
        path_info = "/" + "/".join(segments[i:])
        break

    if script_path == cgi_dir:
        return ResolvedPath("", path_info)

    if not util.is_subpath(script_path, cgi_dir):
        log.warning("Refusing script outside of %s: %s", cgi_dir, script_path)
        return ResolvedPath("", path_info)

    if not os.path.isfile(script_path):
        return ResolvedPath("", path_info)

    return ResolvedPath(script_path, path_info)
