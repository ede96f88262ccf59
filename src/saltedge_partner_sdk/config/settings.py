"""
Settings management for the Salt Edge Partner SDK

Loads credentials and connection settings from a dict, a JSON document, a
JSON file or environment variables, and turns them into a signer and a
ready-to-use client.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ..exceptions import ConfigurationError
from ..http_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientConfig, SaltedgePartnerClient
from ..signing import LocalKeySigner

ENV_VARS = {
    'app_id': 'SALTEDGE_APP_ID',
    'secret': 'SALTEDGE_SECRET',
    'private_key_path': 'SALTEDGE_PRIVATE_KEY_PATH',
    'private_key_passphrase': 'SALTEDGE_PRIVATE_KEY_PASSPHRASE',
    'base_url': 'SALTEDGE_BASE_URL',
    'timeout': 'SALTEDGE_TIMEOUT',
}


class SettingsErrorCodes:
    """Error codes raised while loading settings"""
    PARSE_ERROR = "PARSE_ERROR"
    INVALID_FORMAT = "INVALID_FORMAT"
    FILE_ERROR = "FILE_ERROR"
    MISSING_VALUE = "MISSING_VALUE"


@dataclass
class SaltedgeSettings:
    """
    Credentials and connection settings

    Attributes:
        app_id: Application id
        secret: Application secret
        private_key_path: Path to the PEM private key used for signing
        private_key_passphrase: Passphrase for an encrypted private key
        base_url: API root
        timeout: Request timeout in seconds
    """
    app_id: str
    secret: str
    private_key_path: Optional[str] = None
    private_key_passphrase: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        """Validate settings"""
        if not self.app_id:
            raise ConfigurationError("app_id is required", SettingsErrorCodes.MISSING_VALUE)
        if not self.secret:
            raise ConfigurationError("secret is required", SettingsErrorCodes.MISSING_VALUE)

        try:
            self.timeout = float(self.timeout)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"timeout must be a number, got {self.timeout!r}",
                SettingsErrorCodes.INVALID_FORMAT
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SaltedgeSettings':
        """Create settings from a mapping; unknown keys are ignored."""
        if not isinstance(data, Mapping):
            raise ConfigurationError("Settings must be a JSON object", SettingsErrorCodes.INVALID_FORMAT)

        values = {key: data[key] for key in ENV_VARS if data.get(key) is not None}
        return cls(
            app_id=values.pop('app_id', ''),
            secret=values.pop('secret', ''),
            **values
        )

    @classmethod
    def from_json(cls, json_string: str) -> 'SaltedgeSettings':
        """Create settings from a JSON document"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse settings JSON: {e}", SettingsErrorCodes.PARSE_ERROR)
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'SaltedgeSettings':
        """Create settings from a JSON file"""
        try:
            with open(Path(file_path), 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigurationError(f"Failed to read settings file: {e}", SettingsErrorCodes.FILE_ERROR)
        return cls.from_json(json_string)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'SaltedgeSettings':
        """
        Create settings from ``SALTEDGE_*`` environment variables.

        Args:
            environ: Environment mapping (defaults to ``os.environ``)
        """
        environ = os.environ if environ is None else environ
        return cls.from_dict({
            key: environ.get(variable) or None
            for key, variable in ENV_VARS.items()
        })

    def load_private_key(self) -> Optional[bytes]:
        """Read the PEM private key, if a path is configured."""
        if not self.private_key_path:
            return None
        try:
            return Path(self.private_key_path).expanduser().read_bytes()
        except OSError as e:
            raise ConfigurationError(f"Failed to read private key: {e}", SettingsErrorCodes.FILE_ERROR)

    def build_signer(self) -> Optional[LocalKeySigner]:
        """Return a ``LocalKeySigner`` when a private key is configured."""
        private_key = self.load_private_key()
        if private_key is None:
            return None
        return LocalKeySigner(private_key, self.private_key_passphrase)

    def to_client_config(self) -> ClientConfig:
        return ClientConfig(base_url=self.base_url, timeout=self.timeout)

    def create_client(self, **kwargs) -> SaltedgePartnerClient:
        """
        Build a client from these settings.

        Keyword arguments are forwarded to ``SaltedgePartnerClient`` and
        override the derived signer and config.
        """
        if 'signer' not in kwargs:
            kwargs['signer'] = self.build_signer()
        kwargs.setdefault('config', self.to_client_config())
        return SaltedgePartnerClient(self.app_id, self.secret, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Settings as a dict with the secret and passphrase masked"""
        return {
            'app_id': self.app_id,
            'secret': '***',
            'private_key_path': self.private_key_path,
            'private_key_passphrase': '***' if self.private_key_passphrase else None,
            'base_url': self.base_url,
            'timeout': self.timeout,
        }
