"""
Relay Providers

This module contains the external service implementations following
consistent naming conventions: {deployment}_{provider}_{service}.py pattern.

Available Providers:
    - CloudAWSTranslateProvider: Amazon Translate (cloud_aws_translate.py)
    - CloudAWSPollyProvider: Amazon Polly (cloud_aws_polly.py)
    - CloudAWSS3Provider: Amazon S3 (cloud_aws_s3.py)
    - CloudAWSTranscribeProvider: Amazon Transcribe (cloud_aws_transcribe.py)

All providers implement the protocols defined in base.py.
"""

from relay.providers.base import ObjectStore, SpeechSynthesizer, TranscriptionSubmitter, Translator
from relay.providers.factory import ClientBundle, ClientBundleFactory

__all__ = [
    "Translator",
    "SpeechSynthesizer",
    "ObjectStore",
    "TranscriptionSubmitter",
    "ClientBundle",
    "ClientBundleFactory",
]
