#!/usr/bin/env python

import os

from setuptools import setup


requirements = {
    'install': [
        'numpy>=1.16.0',
        'typing_extensions',
    ],
    'stylecheck': [
        'autopep8>=1.4.1',
        'flake8>=3.7',
        'pycodestyle>=2.5',
    ],
    'test': [
        'pytest',
        'mock',
    ],
}


extras_require = {k: v for k, v in requirements.items() if k != 'install'}
install_requires = requirements['install']
tests_require = requirements['test']


here = os.path.abspath(os.path.dirname(__file__))
# Get __version__ variable
exec(open(os.path.join(here, 'textarray', '_version.py')).read())


setup_kwargs = dict(
    name='textarray',
    version=__version__,  # NOQA
    description='Line-oriented text serialization of fixed-shape arrays',
    license='MIT License',
    packages=['textarray',
              'textarray.serializers',
              'textarray.testing'],
    zip_safe=False,
    install_requires=install_requires,
    tests_require=tests_require,
    extras_require=extras_require,
    python_requires='>=3.6.0',
)


setup(**setup_kwargs)
