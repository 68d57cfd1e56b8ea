#!/usr/bin/env python3

from setuptools import setup

setup(
    name="tagstream",
    version="0.1.0",
    author="Karoly Lorentey",
    author_email="karoly@lorentey.hu",
    packages=["tagstream"],
    entry_points = {
        'console_scripts': ['tagstream = tagstream.commandline:main']
    },
    python_requires=">=3.6",
    license="BSD",
    description="Incremental ID3v2 tag parser in pure Python 3",
    long_description="""
Tagstream reads ID3v2.2, ID3v2.3 and ID3v2.4 tags from a stream of
arbitrarily sized chunks, without ever needing the whole tag in memory.
Frames are handed to a callback (or yielded from an iterator) as soon
as their payload is complete, which makes it suitable for reading tags
through small fixed-size buffers.
""",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Multimedia :: Sound/Audio"
        ],
    )
