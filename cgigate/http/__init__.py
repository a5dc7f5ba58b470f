#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

from cgigate.http.request import Request
from cgigate.http.response import Response

__all__ = ['Request', 'Response']
