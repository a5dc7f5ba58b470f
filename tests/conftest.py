#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

"""Pytest configuration for cgigate tests."""

import os
import sys

import pytest

# Add the tests directory to sys.path so test support modules can be imported
# as 'tests.module_name'
tests_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if tests_dir not in sys.path:
    sys.path.insert(0, tests_dir)

from tests.support import make_cgi_dir, make_config  # noqa: E402


@pytest.fixture
def cgi_dir(tmp_path):
    """A CGI directory populated with the test scripts."""
    return make_cgi_dir(tmp_path)


@pytest.fixture
def cfg(cgi_dir):
    return make_config(cgi_dir, timeout=5)
