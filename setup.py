#!/usr/bin/env python
# -*- coding: utf-8 -*-
from setuptools import find_packages, setup

# There are problems running setup.py on Windows if the encoding is not set
with open('README.md', encoding='utf8') as readme_file:
    readme = readme_file.read()
with open('HISTORY.rst', encoding='utf8') as history_file:
    history = history_file.read()


setup(
    name='galog',
    version='0.3.0',
    description="Ships structured log events to the Google Analytics 4 Measurement Protocol.",
    long_description=readme + '\n\n' + history,
    long_description_content_type="text/markdown",
    author="galog contributors",
    packages=find_packages(include=['galog', 'galog.*']),
    entry_points={
        'console_scripts': [
            'galog=galog.cli:cli'
        ]
    },
    include_package_data=True,
    install_requires=[
        'httpx>=0.24',
        'pydantic>=2.0,<3.0',
        'tenacity>=8.0',
        'typer>=0.12',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    python_requires=">=3.9",
    license="MIT license",
    zip_safe=False,
    keywords='logging google-analytics ga4 measurement-protocol telemetry',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: System :: Logging',
    ]
)
