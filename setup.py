#!/usr/bin/env python3

from setuptools import setup

setup(
    name="bmark",
    version="0.1.0",
    description="Directory bookmarks and shell aliases for nerds.",
    author="Sean O'Connell",
    author_email="sean@sdoconnell.net",
    url="https://github.com/sdoconnell/bmark",
    license="MIT",
    python_requires='>=3.8',
    packages=['bmark'],
    install_requires=[
        'Rich>=10.2',
        'watchdog>=2.1'
    ],
    extras_require={
        'test': [
            'pytest>=7.0'
        ]
    },
    include_package_data=True,
    entry_points={
        "console_scripts": "bmark=bmark.bmark:main"
    },
    keywords='cli bookmarks directories shell aliases utility',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: End Users/Desktop',
        'Natural Language :: English',
        'Operating System :: POSIX',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.8',
        'Topic :: System :: Shells',
        'Topic :: Utilities'
    ]
)
