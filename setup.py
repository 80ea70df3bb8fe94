""" SeismicMute is a library for spatially interpolated muting of seismic traces. """

from setuptools import setup, find_packages
import re

with open('seismicmute/__init__.py', 'r') as f:
    version = re.search(r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]', f.read(), re.MULTILINE).group(1)

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name='SeismicMute',
    packages=find_packages(),
    version=version,
    license='Apache License 2.0',
    description='Muting of seismic traces with bilinearly interpolated mute functions',
    long_description=long_description,
    long_description_content_type="text/markdown",
    zip_safe=False,
    platforms='any',
    include_package_data=True,
    install_requires=[
        'numba>=0.53.1',
        'numpy>=1.19.5',
        'pandas>=1.1.5',
        'segyio>=1.9.5',
        'tqdm>=4.56.0',
    ],
    extras_require={
        'test': ['pytest>=6.0.1'],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering',
    ],
)
