"""Configuration objects and helpers."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .encoding import RFC3986, EncodingRule


@dataclass(slots=True, frozen=True)
class CodecConfig:
    """Default separator and encoding rule used by the codec facade."""

    separator: str = "&"
    encoding: EncodingRule = RFC3986


@dataclass(slots=True, frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: int = logging.WARNING


@dataclass(slots=True, frozen=True)
class AppConfig:
    """Aggregate configuration dataclass."""

    codec: CodecConfig
    logging: LoggingConfig

    @property
    def separator(self) -> str:
        return self.codec.separator

    @property
    def encoding(self) -> EncodingRule:
        return self.codec.encoding


class Settings(BaseSettings):
    """Runtime configuration parsed from environment variables."""

    separator: str = Field("&", alias="QUERY_CODEC_SEPARATOR")
    encoding: EncodingRule = Field(RFC3986, alias="QUERY_CODEC_ENCODING")
    log_level: str | int = Field(logging.WARNING, alias="QUERY_CODEC_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("encoding", mode="before")
    @classmethod
    def _normalize_encoding(cls, value: object) -> EncodingRule:
        if isinstance(value, str):
            name = value.strip().upper()
            if name in EncodingRule.__members__:
                return EncodingRule[name]
            value = int(name) if name.isdigit() else name
        try:
            return EncodingRule(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Unknown encoding: {value}") from exc

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str | int) -> int:
        if isinstance(value, int):
            return value
        name = value.upper().strip()
        if name not in logging._nameToLevel:  # noqa: SLF001 - accessing mapping for conversion only
            raise ValueError(f"Unknown log level: {value}")
        return logging._nameToLevel[name]

    def to_dataclass(self) -> AppConfig:
        """Transform runtime settings into frozen dataclasses."""

        return AppConfig(
            codec=CodecConfig(separator=self.separator, encoding=self.encoding),
            logging=LoggingConfig(level=self.log_level),
        )


def load_settings() -> AppConfig:
    """Load settings from the environment and return dataclasses."""

    return Settings().to_dataclass()


__all__ = [
    "AppConfig",
    "CodecConfig",
    "LoggingConfig",
    "Settings",
    "load_settings",
]
