"""
Configuration and logging setup.

Settings
- alias: invocation alias a message must start with ("luna ban ...").
- aliasless_channels: channel names where the alias may be omitted.
- excluded_channels: channel names the bot never answers in. Compared after
  sanitize(), so "#off-topic" and "off topic" are the same channel.
- level: logging level name used by configure_logging().

Settings are frozen once built. JSON files may use either the snake_case field
names or the camelCase keys of the bot's config.json ("aliaslessChannels").
"""
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from rich.logging import RichHandler

from .utils import sanitize


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    alias: str = "luna"
    aliasless_channels: frozenset[str] = frozenset()
    excluded_channels: frozenset[str] = frozenset()
    level: str = "INFO"

    @field_validator("alias")
    @classmethod
    def _alias(cls, value):
        if not (value := " ".join(value.split()).lower()):
            raise ValueError("alias cannot be empty")
        return value

    @field_validator("level")
    @classmethod
    def _level(cls, value):
        if (value := value.strip().upper()) not in logging.getLevelNamesMapping():
            raise ValueError("unknown logging level %r" % value)
        return value

    def excludes(self, channel, /):
        """
        Return True when `channel` is one of the excluded channels.
        """
        return sanitize(channel) in {sanitize(name) for name in self.excluded_channels}

    @classmethod
    def load(cls, path, /):
        """
        Read settings from a JSON file.

        Raises
        - OSError when the file cannot be read.
        - pydantic.ValidationError when its content is invalid.
        """
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))


def configure_logging(level="INFO", /):
    """
    Route the "luna" logger through a rich handler at `level`.

    Calling it again replaces the handler instead of stacking a second one.
    """
    logger = logging.getLogger("luna")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(rich_tracebacks=True, show_path=False))
    logger.setLevel(level)
    return logger


__all__ = (
    "Settings",
    "configure_logging",
)
