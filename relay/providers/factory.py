"""
Client Bundle Factory

Builds the set of service clients the orchestrator needs from
configuration. All clients share one explicitly constructed boto3 Session;
nothing is held in module-level state, so tests can pass any bundle of
fakes to the orchestrator instead.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError

from relay.config import RelayConfig
from relay.errors import ConfigurationError
from relay.providers.base import ObjectStore, SpeechSynthesizer, TranscriptionSubmitter, Translator
from relay.providers.cloud_aws_polly import CloudAWSPollyProvider
from relay.providers.cloud_aws_s3 import CloudAWSS3Provider
from relay.providers.cloud_aws_transcribe import CloudAWSTranscribeProvider
from relay.providers.cloud_aws_translate import CloudAWSTranslateProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientBundle:
    """The four external collaborators used by a run."""
    translator: Translator
    synthesizer: SpeechSynthesizer
    store: ObjectStore
    submitter: TranscriptionSubmitter


class ClientBundleFactory:
    """Factory for creating AWS-backed client bundles.

    Example:
        >>> config = RelayConfig.load_from_yaml('relay.yaml')
        >>> factory = ClientBundleFactory(config)
        >>> clients = factory.create_bundle()
        >>> errors = factory.validate_requirements(clients)
    """

    def __init__(self, config: RelayConfig, session: Optional[boto3.session.Session] = None):
        self.config = config
        self._session = session

    @property
    def session(self) -> boto3.session.Session:
        if self._session is None:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> boto3.session.Session:
        # Only pass credentials if explicitly provided so boto3 can use its
        # credential chain (env vars, AWS CLI config, IAM roles)
        aws = self.config.aws
        kwargs = {'region_name': aws.region}
        if aws.profile:
            kwargs['profile_name'] = aws.profile
        if aws.access_key_id and aws.secret_access_key:
            kwargs['aws_access_key_id'] = aws.access_key_id
            kwargs['aws_secret_access_key'] = aws.secret_access_key
            if aws.session_token:
                kwargs['aws_session_token'] = aws.session_token

        try:
            return boto3.session.Session(**kwargs)
        except BotoCoreError as e:
            raise ConfigurationError(f"Failed to create AWS session: {e}") from e

    def create_bundle(self) -> ClientBundle:
        """Create all four clients from the shared session.

        Raises:
            ConfigurationError: If the session or a client cannot be created
        """
        session = self.session
        try:
            bundle = ClientBundle(
                translator=CloudAWSTranslateProvider(session.client('translate')),
                synthesizer=CloudAWSPollyProvider(
                    session.client('polly'), engine=self.config.speech.engine
                ),
                store=CloudAWSS3Provider(session.client('s3')),
                submitter=CloudAWSTranscribeProvider(session.client('transcribe')),
            )
        except BotoCoreError as e:
            raise ConfigurationError(f"Failed to create AWS clients: {e}") from e

        logger.debug(f"Created AWS client bundle in region {session.region_name}")
        return bundle

    def validate_requirements(self, bundle: Optional[ClientBundle] = None) -> Dict[str, List[str]]:
        """Check credentials and reachability of every service.

        Returns:
            Mapping of service name to error messages. All lists empty means ready.
        """
        if self.session.get_credentials() is None:
            message = (
                "AWS credentials not found. Run 'aws configure', set AWS_ACCESS_KEY_ID and "
                "AWS_SECRET_ACCESS_KEY, or set aws.access_key_id/aws.secret_access_key in config.yaml"
            )
            return {'credentials': [message]}

        bundle = bundle or self.create_bundle()
        return {
            'translate': bundle.translator.validate_requirements(),
            'polly': bundle.synthesizer.validate_requirements(self.config.speech.voice_id),
            's3': bundle.store.validate_requirements(self.config.storage.bucket),
            'transcribe': bundle.submitter.validate_requirements(),
        }
