"""
Packaging for subproto. Tests live beside the modules as *_test.py and run with pytest:

    pip install -e .[test]
    pytest src
"""

from setuptools import setup


setup(
    name='subproto-dispatch-py',
    version='0.0.1',
    description='Locator handlers that dispatch sub-protocols, like jdbc:mysql://, to connection factories.',
    url='',
    author='',
    author_email='',
    license='LGPL',
    package_dir={'': 'src'},
    packages=['subproto', 'subproto.config', 'subproto.connection', 'subproto.handler',
              'subproto.locator', 'subproto.support', 'subproto.testing'],
    python_requires='>=3.6',
    install_requires=[
        'configobj',
    ],
    extras_require={
        'test': ['PyHamcrest', 'pytest'],
    },
    zip_safe=False,
)
