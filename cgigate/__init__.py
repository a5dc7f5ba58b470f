#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

version_info = (0, 3, 0)
__version__ = ".".join([str(v) for v in version_info])
SERVER = "cgigate"
GATEWAY_INTERFACE = "CGI/1.1"
