#!/usr/bin/env python3

import setuptools

import osc_iso


with open("README.md") as fh:
    lines = fh.readlines()
    while lines:
        line = lines[0].strip()
        if not line or line.startswith("["):
            # skip leading empty lines
            # skip leading lines with links to badges
            lines.pop(0)
            continue
        break
    long_description = "".join(lines)


setuptools.setup(
    name='osc-iso',
    version=osc_iso.__version__,
    description='Local product ISO builds with osc',
    long_description=long_description,
    long_description_content_type="text/markdown",
    author='SUSE LLC',
    license='GPLv3+',
    platforms=['Linux'],
    keywords=['openSUSE', 'SUSE', 'kiwi', 'ISO', 'build', 'buildservice'],
    packages=['osc_iso', 'osc_iso.output', 'osc_iso.util'],
    python_requires='>=3.8',
    install_requires=['lxml'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'osc-iso = osc_iso.commandline:main',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Build Tools",
        "Topic :: System :: Archiving :: Packaging",
    ],
)
