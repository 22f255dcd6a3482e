"""
setup.py

Packaging metadata and CLI entry point for speech-relay.

Version: 0.1.0: Translate → Polly → S3 → Transcribe pipeline with a click
CLI (run, check, names), YAML/env configuration and JSON run reports.
"""
from setuptools import setup, find_packages

setup(
    name="speech-relay",
    version="0.1.0",
    packages=find_packages(include=["relay", "relay.*", "cli", "cli.*"]),
    install_requires=[
        "boto3",
        "botocore",
        "click",
        "pydantic>=2.0",
        "python-dotenv",
        "PyYAML",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "speech-relay=cli:cli",
        ],
    },
    python_requires=">=3.8",
)
