#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

from cgigate.cgi.resolver import ResolvedPath, find_script
from cgigate.cgi.environ import create
from cgigate.cgi.process import run_script
from cgigate.cgi.parser import CGIResponse, parse_response, parse_status
from cgigate.cgi.errors import (
    CGIException,
    AmbiguousHost,
    UnknownScheme,
    InvalidPort,
    BodyReadError,
    ScriptExecError,
    ScriptTimeout,
    InvalidCGIResponse,
    MalformedHeader,
    MissingStatus,
    InvalidStatus,
)

__all__ = [
    'ResolvedPath',
    'find_script',
    'create',
    'run_script',
    'CGIResponse',
    'parse_response',
    'parse_status',
    'CGIException',
    'AmbiguousHost',
    'UnknownScheme',
    'InvalidPort',
    'BodyReadError',
    'ScriptExecError',
    'ScriptTimeout',
    'InvalidCGIResponse',
    'MalformedHeader',
    'MissingStatus',
    'InvalidStatus',
]
