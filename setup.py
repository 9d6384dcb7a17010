#!/usr/bin/env python3

import re
from setuptools import setup
from os.path import dirname, join


def read(*parts):
    return open(join(dirname(__file__), *parts), 'r').read()


__version__ = re.search(
        r"^__version__ = '([^']+)'$",
        read('aprsdecode', '__init__.py'),
        re.MULTILINE
).group(1)

requirements = [
        'pint',
        'signalslot',
]

packages = [
        'aprsdecode',
]

setup(
        name='aprsdecode',
        version=__version__,
        license='GPL-2.0-or-later',
        packages=packages,
        requires=requirements,
        install_requires=requirements,
        extras_require={
            'test': ['pytest'],
        },
        python_requires='>=3.6',
        description='APRS packet decoder for TNC2 format text in pure Python',
        long_description=read('README.md'),
        long_description_content_type='text/markdown',
        classifiers=[
            'Development Status :: 3 - Alpha',
            'Intended Audience :: Developers',
            'License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)',
            'Operating System :: OS Independent',
            'Programming Language :: Python :: 3 :: Only',
            'Topic :: Communications :: Ham Radio'
        ]
)
