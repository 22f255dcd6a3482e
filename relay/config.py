"""
Relay Configuration Management

This module provides configuration classes for the speech relay pipeline.
It handles configuration loading from YAML files with environment variable
substitution and precedence rules.

Configuration Precedence (highest to lowest):
1. Explicit parameters passed on the command line
2. Values in the YAML config file (supporting ${VAR:-default} substitution)
3. Environment variables (RELAY_*, AWS_*)
4. System defaults (the reference behavior)
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from relay.errors import ConfigurationError


@dataclass
class AWSConfig:
    """AWS session configuration shared by all clients.

    Credentials are optional: when omitted, boto3 falls back to its
    credential chain (env vars, AWS CLI config, IAM roles).
    """
    region: str = "ap-northeast-1"
    profile: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token: Optional[str] = None


@dataclass
class TranslateConfig:
    """Language pair used for every translation call."""
    source_language: str = "ja"
    target_language: str = "en"


@dataclass
class SpeechConfig:
    """Speech synthesis settings.

    Attributes:
        voice_id: Polly voice identifier
        output_format: Audio encoding (mp3, ogg_vorbis, pcm)
        engine: Optional Polly engine (standard, neural); service default if None
    """
    voice_id: str = "Joanna"
    output_format: str = "mp3"
    engine: Optional[str] = None


@dataclass
class StorageConfig:
    """Object storage settings.

    Attributes:
        bucket: Destination bucket for audio (and optionally translations)
        upload_translations: Upload the translation sink before deleting it
    """
    bucket: Optional[str] = None
    upload_translations: bool = False


@dataclass
class TranscribeConfig:
    """Transcription job settings.

    Attributes:
        language_code: Language of the synthesized speech
        media_format: Media format declared to the transcription service
        output_bucket: Bucket for transcripts; defaults to the storage bucket
    """
    language_code: str = "en-US"
    media_format: str = "mp3"
    output_bucket: Optional[str] = None


@dataclass
class NamingConfig:
    """Artifact naming scheme.

    Names have one-second resolution. unique_suffix appends a random
    component to avoid same-second collisions; it is off by default.
    """
    audio_prefix: str = "audioFile"
    audio_suffix: str = "output"
    job_prefix: str = "transcription-job"
    translations_prefix: str = "translated_text"
    timestamp_format: str = "%Y%m%d%H%M%S"
    unique_suffix: bool = False


@dataclass
class RunConfig:
    """Local file locations and logging for a run."""
    input_path: str = "./input.txt"
    output_path: str = "translated_text.txt"
    staging_dir: str = "."
    log_level: str = "info"
    log_file: Optional[str] = None


VALID_OUTPUT_FORMATS = ("mp3", "ogg_vorbis", "pcm")
VALID_MEDIA_FORMATS = ("mp3", "mp4", "wav", "flac", "ogg", "amr", "webm")
VALID_LOG_LEVELS = ("debug", "info", "warning", "error")

DEFAULT_CONFIG_PATHS = (
    "./.speech-relay/config.yaml",
    "~/.speech-relay/config.yaml",
)


@dataclass
class RelayConfig:
    """Main configuration class aggregating every section."""
    aws: AWSConfig = field(default_factory=AWSConfig)
    translate: TranslateConfig = field(default_factory=TranslateConfig)
    speech: SpeechConfig = field(default_factory=SpeechConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    transcribe: TranscribeConfig = field(default_factory=TranscribeConfig)
    naming: NamingConfig = field(default_factory=NamingConfig)
    run: RunConfig = field(default_factory=RunConfig)

    @property
    def output_bucket(self) -> Optional[str]:
        """Bucket receiving transcripts; falls back to the storage bucket."""
        return self.transcribe.output_bucket or self.storage.bucket

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "RelayConfig":
        """Load from ``config_path``, else the first existing default location,
        else environment variables and defaults.

        Default locations (checked in order):
            ./.speech-relay/config.yaml
            ~/.speech-relay/config.yaml
        """
        if config_path:
            return cls.load_from_yaml(config_path)
        for candidate in DEFAULT_CONFIG_PATHS:
            path = Path(candidate).expanduser()
            if path.exists():
                return cls.load_from_yaml(str(path))
        return cls.from_env()

    @classmethod
    def from_env(cls) -> "RelayConfig":
        """Build configuration from environment variables and defaults only."""
        return cls._from_dict({})

    @classmethod
    def load_from_yaml(cls, config_path: str) -> "RelayConfig":
        """Load configuration from YAML file with environment variable substitution.

        Args:
            config_path: Path to config.yaml file

        Returns:
            RelayConfig instance with loaded configuration

        Raises:
            ConfigurationError: If config file doesn't exist or is invalid
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping, got {type(config_data).__name__}"
            )

        return cls._from_dict(config_data)

    @classmethod
    def _from_dict(cls, config_data: Dict[str, Any]) -> "RelayConfig":
        aws_data = config_data.get('aws') or {}
        translate_data = config_data.get('translate') or {}
        speech_data = config_data.get('speech') or {}
        storage_data = config_data.get('storage') or {}
        transcribe_data = config_data.get('transcribe') or {}
        naming_data = config_data.get('naming') or {}
        run_data = config_data.get('run') or {}

        resolve = cls._resolve_value

        aws = AWSConfig(
            region=resolve(aws_data.get('region'), 'AWS_DEFAULT_REGION', 'ap-northeast-1'),
            profile=resolve(aws_data.get('profile'), 'AWS_PROFILE', None),
            access_key_id=resolve(aws_data.get('access_key_id'), 'AWS_ACCESS_KEY_ID', None),
            secret_access_key=resolve(aws_data.get('secret_access_key'), 'AWS_SECRET_ACCESS_KEY', None),
            session_token=resolve(aws_data.get('session_token'), 'AWS_SESSION_TOKEN', None),
        )

        translate = TranslateConfig(
            source_language=resolve(translate_data.get('source_language'), 'RELAY_SOURCE_LANGUAGE', 'ja'),
            target_language=resolve(translate_data.get('target_language'), 'RELAY_TARGET_LANGUAGE', 'en'),
        )

        speech = SpeechConfig(
            voice_id=resolve(speech_data.get('voice_id'), 'RELAY_VOICE_ID', 'Joanna'),
            output_format=resolve(speech_data.get('output_format'), 'RELAY_OUTPUT_FORMAT', 'mp3'),
            engine=resolve(speech_data.get('engine'), 'RELAY_SPEECH_ENGINE', None),
        )

        storage = StorageConfig(
            bucket=resolve(storage_data.get('bucket'), 'RELAY_BUCKET', None),
            upload_translations=cls._to_bool(
                resolve(storage_data.get('upload_translations'), 'RELAY_UPLOAD_TRANSLATIONS', False)
            ),
        )

        transcribe = TranscribeConfig(
            language_code=resolve(transcribe_data.get('language_code'), 'RELAY_TRANSCRIBE_LANGUAGE', 'en-US'),
            media_format=resolve(transcribe_data.get('media_format'), 'RELAY_TRANSCRIBE_MEDIA_FORMAT', 'mp3'),
            output_bucket=resolve(transcribe_data.get('output_bucket'), 'RELAY_TRANSCRIBE_OUTPUT_BUCKET', None),
        )

        defaults = NamingConfig()
        naming = NamingConfig(
            audio_prefix=naming_data.get('audio_prefix') or defaults.audio_prefix,
            audio_suffix=naming_data.get('audio_suffix') or defaults.audio_suffix,
            job_prefix=naming_data.get('job_prefix') or defaults.job_prefix,
            translations_prefix=naming_data.get('translations_prefix') or defaults.translations_prefix,
            timestamp_format=naming_data.get('timestamp_format') or defaults.timestamp_format,
            unique_suffix=cls._to_bool(
                resolve(naming_data.get('unique_suffix'), 'RELAY_UNIQUE_NAMES', False)
            ),
        )

        run = RunConfig(
            input_path=resolve(run_data.get('input_path'), 'RELAY_INPUT_PATH', './input.txt'),
            output_path=resolve(run_data.get('output_path'), 'RELAY_OUTPUT_PATH', 'translated_text.txt'),
            staging_dir=resolve(run_data.get('staging_dir'), 'RELAY_STAGING_DIR', '.'),
            log_level=str(resolve(run_data.get('log_level'), 'RELAY_LOG_LEVEL', 'info')).lower(),
            log_file=resolve(run_data.get('log_file'), 'RELAY_LOG_FILE', None),
        )

        return cls(
            aws=aws,
            translate=translate,
            speech=speech,
            storage=storage,
            transcribe=transcribe,
            naming=naming,
            run=run,
        )

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.storage.bucket:
            errors.append(
                "storage.bucket is required. Set RELAY_BUCKET or storage.bucket in config.yaml"
            )
        if not self.aws.region:
            errors.append("aws.region is required")
        if bool(self.aws.access_key_id) != bool(self.aws.secret_access_key):
            errors.append("aws.access_key_id and aws.secret_access_key must be set together")
        if not self.translate.source_language or not self.translate.target_language:
            errors.append("translate.source_language and translate.target_language are required")
        if not self.speech.voice_id:
            errors.append("speech.voice_id is required")
        if self.speech.output_format not in VALID_OUTPUT_FORMATS:
            errors.append(
                f"Invalid speech.output_format '{self.speech.output_format}'. "
                f"Valid options: {list(VALID_OUTPUT_FORMATS)}"
            )
        if self.transcribe.media_format not in VALID_MEDIA_FORMATS:
            errors.append(
                f"Invalid transcribe.media_format '{self.transcribe.media_format}'. "
                f"Valid options: {list(VALID_MEDIA_FORMATS)}"
            )
        if self.run.log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid run.log_level '{self.run.log_level}'. "
                f"Valid options: {list(VALID_LOG_LEVELS)}"
            )

        return errors

    def describe(self) -> Dict[str, Any]:
        """Flatten configuration for debug logging."""
        return {
            'aws.region': self.aws.region,
            'aws.profile': self.aws.profile,
            'aws.access_key_id': self.aws.access_key_id,
            'aws.secret_access_key': self.aws.secret_access_key,
            'translate.source_language': self.translate.source_language,
            'translate.target_language': self.translate.target_language,
            'speech.voice_id': self.speech.voice_id,
            'speech.output_format': self.speech.output_format,
            'storage.bucket': self.storage.bucket,
            'storage.upload_translations': self.storage.upload_translations,
            'transcribe.language_code': self.transcribe.language_code,
            'transcribe.output_bucket': self.output_bucket,
            'naming.unique_suffix': self.naming.unique_suffix,
            'run.input_path': self.run.input_path,
            'run.output_path': self.run.output_path,
            'run.staging_dir': self.run.staging_dir,
        }

    @staticmethod
    def _resolve_value(config_value: Any, env_var: str, default: Any) -> Any:
        """Resolve configuration value with precedence rules.

        Precedence (highest to lowest):
        1. Explicit config value (if not None and not empty string)
        2. Environment variable
        3. Default value

        Supports environment variable substitution syntax: ${VAR_NAME:-default}
        """
        if isinstance(config_value, str) and '${' in config_value:
            pattern = r'\$\{([^}:]+)(?::-([^}]*))?\}'

            def replace_env_var(match):
                var_name = match.group(1)
                var_default = match.group(2) if match.group(2) is not None else ''
                return os.getenv(var_name, var_default)

            config_value = re.sub(pattern, replace_env_var, config_value)

            if config_value == '':
                config_value = None

        if config_value is not None and config_value != '':
            return config_value

        env_value = os.getenv(env_var)
        if env_value is not None and env_value != '':
            return env_value

        return default

    @staticmethod
    def _to_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ('1', 'true', 'yes', 'on')
