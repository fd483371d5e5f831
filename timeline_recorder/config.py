"""
Recorder configuration and logging setup.
"""

from dataclasses import asdict, dataclass, fields
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

import yaml

from .tick_source import DEFAULT_EVENT

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ResumePolicy(Enum):
    """What resume() does after a pause."""
    RESTART = "restart"    # Run the session start procedure again
    CONTINUE = "continue"  # Pick up from the paused playhead


@dataclass
class RecorderConfig:
    # Tick source
    event_name: str = DEFAULT_EVENT
    # Session control
    strict_transitions: bool = True     # Reject record()/play() during an active session
    resume_policy: ResumePolicy = ResumePolicy.RESTART
    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_max_size_mb: int = 50
    log_backup_count: int = 5

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RecorderConfig":
        """Build a config from a plain dictionary, ignoring unknown keys."""
        data = dict(data or {})

        # Accept the nested layout used in YAML files as well as flat keys
        log_section = data.pop("logging", None) or {}
        for key in ("level", "file", "max_size_mb", "backup_count"):
            if key in log_section:
                data.setdefault(f"log_{key}", log_section[key])

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown recorder config keys: {', '.join(unknown)}")

        values = {k: v for k, v in data.items() if k in known}
        if "resume_policy" in values:
            values["resume_policy"] = ResumePolicy(values["resume_policy"])

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["resume_policy"] = self.resume_policy.value
        return data


def load_config(config_path: Union[str, Path]) -> RecorderConfig:
    """Load configuration from a YAML file, falling back to defaults."""
    config_file = Path(config_path)

    if not config_file.exists():
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return RecorderConfig()

    with open(config_file) as f:
        raw = yaml.safe_load(f) or {}

    # Allow the recorder settings to live under their own section
    if isinstance(raw.get("recorder"), dict):
        raw = raw["recorder"]

    logger.info(f"Loaded configuration from {config_path}")
    return RecorderConfig.from_dict(raw)


def setup_logging(config: RecorderConfig):
    """Configure root logging from the recorder config."""
    level = getattr(logging, config.log_level.upper())

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = RotatingFileHandler(
            config.log_file,
            maxBytes=config.log_max_size_mb * 1024 * 1024,
            backupCount=config.log_backup_count,
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)
