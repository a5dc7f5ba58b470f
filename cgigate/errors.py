#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

# We don't need to call super() in __init__ methods of our
# BaseException and Exception classes because we also define
# our own __str__ methods so there is no need to pass 'message'
# to the base class to get a meaningful output from 'str(exc)'.
# pylint: disable=super-init-not-called


class ConfigError(Exception):
    """ Exception raised on config error """


class MissingConfig(ConfigError):
    def __str__(self):
        return "No config"


class MissingSetting(ConfigError):
    def __init__(self, name):
        self.name = name

    def __str__(self):
        return "%s missing from config" % self.name


class InvalidSetting(ConfigError):
    def __init__(self, name, value):
        self.name = name
        self.value = value

    def __str__(self):
        return "Invalid value for %s: %r" % (self.name, self.value)


class CgiDirNotFound(ConfigError):
    def __init__(self, path):
        self.path = path

    def __str__(self):
        return "CGI directory %r does not exist" % self.path
