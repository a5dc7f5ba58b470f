# -*- coding: utf-8 -
#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

import os

from setuptools import setup, find_packages

from cgigate import __version__


CLASSIFIERS = [
    'Development Status :: 4 - Beta',
    'Environment :: Web Environment',
    'Intended Audience :: Developers',
    'Intended Audience :: System Administrators',
    'License :: OSI Approved :: MIT License',
    'Operating System :: POSIX',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3 :: Only',
    'Programming Language :: Python :: Implementation :: CPython',
    'Topic :: Internet',
    'Topic :: Internet :: WWW/HTTP',
    'Topic :: Internet :: WWW/HTTP :: Dynamic Content :: CGI Tools/Libraries',
    'Topic :: Internet :: WWW/HTTP :: WSGI',
    'Topic :: Internet :: WWW/HTTP :: WSGI :: Application']

# read long description
with open(os.path.join(os.path.dirname(__file__), 'README.rst')) as f:
    long_description = f.read()

# read dev requirements
fname = os.path.join(os.path.dirname(__file__), 'requirements_test.txt')
with open(fname) as f:
    tests_require = [l.strip() for l in f.readlines()]


install_requires = [
    # The runner hosts the gateway in gunicorn through
    # gunicorn.app.base.BaseApplication.
    'gunicorn>=20.1',
]

extras_require = {
    'test': tests_require,
}

setup(
    name='cgigate',
    version=__version__,

    description='CGI/1.1 gateway for WSGI servers',
    long_description=long_description,
    long_description_content_type='text/x-rst',
    license='MIT',

    python_requires='>=3.7',
    install_requires=install_requires,
    classifiers=CLASSIFIERS,
    zip_safe=False,
    packages=find_packages(exclude=['examples', 'tests']),
    include_package_data=True,

    entry_points="""
    [console_scripts]
    cgigate=cgigate.app.wsgiapp:run

    [paste.app_factory]
    main=cgigate.app.wsgiapp:make_app
    """,
    extras_require=extras_require,
)
