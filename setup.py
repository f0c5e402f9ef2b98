import os

from setuptools import find_packages, setup


def read_version():
    version = {}
    with open(os.path.join('rpe', 'version.py')) as f:
        exec(f.read(), version)
    return version['__version__']


setup(name='rpe',
      version=read_version(),
      description='Remote Provisioning Extension: push a DNS suffix to '
      'Intel AMT with a single DHCP ACK',
      python_requires='>=3.10',
      packages=find_packages(exclude=['tests']),
      install_requires=[
          'click>=8.0',
          'loguru>=0.6',
          'netifaces>=0.11',
      ],
      extras_require={'test': ['pytest>=7']},
      entry_points={'console_scripts': ['rpe = rpe.__main__:main']})
