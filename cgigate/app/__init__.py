#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.
