#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

# We don't need to call super() in __init__ methods of our
# BaseException and Exception classes because we also define
# our own __str__ methods so there is no need to pass 'message'
# to the base class to get a meaningful output from 'str(exc)'.
# pylint: disable=super-init-not-called


class CGIException(Exception):
    """Base exception for errors raised while serving a CGI request.

    ``code`` is the HTTP status the client gets. The message itself only
    goes to the error log.
    """

    code = 500


class AmbiguousHost(CGIException):
    """Raised when the Host field holds more than one port separator."""

    def __init__(self, host):
        self.host = host

    def __str__(self):
        return "Ambiguous host: %r" % self.host


class UnknownScheme(CGIException):
    """Raised when no port can be derived from the request scheme."""

    def __init__(self, scheme):
        self.scheme = scheme

    def __str__(self):
        return "Unknown scheme: %r" % self.scheme


class InvalidPort(CGIException):
    def __init__(self, port):
        self.port = port

    def __str__(self):
        return "Invalid port in host: %r" % self.port


class BodyReadError(CGIException):
    """Raised when the request body can't be read in full."""

    code = 400

    def __init__(self, msg=""):
        self.msg = msg

    def __str__(self):
        return "Unable to read request body: %s" % self.msg


class ScriptExecError(CGIException):
    """Raised when a script can't be started or exits with an error."""

    def __init__(self, script, msg="", returncode=None, output=None):
        self.script = script
        self.msg = msg
        self.returncode = returncode
        self.output = output

    def __str__(self):
        if self.returncode is not None:
            return "Script %r exited with status %d" % (
                self.script, self.returncode)
        return "Unable to run script %r: %s" % (self.script, self.msg)


class ScriptTimeout(CGIException):
    """Raised when a script runs longer than the configured timeout."""

    def __init__(self, script, timeout):
        self.script = script
        self.timeout = timeout

    def __str__(self):
        return "Script %r killed after %ss" % (self.script, self.timeout)


class InvalidCGIResponse(CGIException):
    """Raised when the script output has no header block."""

    def __init__(self, msg="no end of headers"):
        self.msg = msg

    def __str__(self):
        return "Invalid CGI response: %s" % self.msg


class MalformedHeader(InvalidCGIResponse):
    def __init__(self, line):
        self.line = line
        self.msg = "malformed header line %r" % line


class MissingStatus(InvalidCGIResponse):
    def __init__(self):
        self.msg = "missing Status header"


class InvalidStatus(InvalidCGIResponse):
    def __init__(self, status):
        self.status = status
        self.msg = "invalid status %r" % status
