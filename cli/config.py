"""Persistent settings for the registry CLI."""

import json
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Optional

from common.constants import REGISTRY_PORT
from common.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / '.filereg' / 'config.json'


def _default_base_url() -> str:
    return os.environ.get('REGISTRY_URL', f"http://localhost:{REGISTRY_PORT}")


@dataclass
class ClientConfig:
    """
    Settings the registry client reads, stored as JSON at ``path``.

    The credential is the bearer token sent with insert and delete. It is
    written with owner-only permissions where the platform allows it.
    """

    path: Path
    base_url: str = field(default_factory=_default_base_url)
    timeout: float = 30.0
    max_retries: int = 3
    retry_backoff: float = 2.0
    credential: Optional[str] = None

    @classmethod
    def load(cls, path: Path) -> 'ClientConfig':
        """
        Read settings from ``path``; missing or unreadable files yield defaults.

        Unknown keys and values of the wrong type are ignored.
        """
        config = cls(path=Path(path))
        if not config.path.exists():
            return config

        try:
            data = json.loads(config.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable config {config.path}: {e}")
            return config

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {config.path}: expected a JSON object")
            return config

        for setting in fields(cls):
            if setting.name == 'path' or setting.name not in data:
                continue
            value = data[setting.name]
            current = getattr(config, setting.name)
            if not _same_kind(current, value, allow_none=setting.name == 'credential'):
                logger.warning(f"Ignoring config value for {setting.name}: {value!r}")
                continue
            setattr(config, setting.name, value)
        return config

    def to_dict(self) -> dict:
        data = asdict(self)
        del data['path']
        if data['credential'] is None:
            del data['credential']
        return data

    def save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.to_dict(), indent=2))
            os.chmod(self.path, 0o600)
        except OSError as e:
            logger.warning(f"Could not save config to {self.path}: {e}")

    def set_credential(self, credential: str) -> None:
        self.credential = credential
        self.save()


def _same_kind(current, value, allow_none: bool = False) -> bool:
    if value is None:
        return allow_none
    if isinstance(value, bool):
        return False
    if isinstance(current, float):
        return isinstance(value, (int, float))
    if isinstance(current, int):
        return isinstance(value, int)
    return isinstance(value, str)
