"""Pydantic configuration models for vylobot."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from matching.validator import DEFAULT_CONFUSABLE_PAIRS

VALID_LLM_PROVIDERS = {"auto", "gemini"}


class LLMConfig(BaseModel):
    """Generative fallback configuration. Disabled unless ``enabled``."""

    enabled: bool = False
    provider: str = "auto"
    model: Optional[str] = None  # None = use provider default
    api_key: Optional[str] = None
    max_tokens: int = 1000

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_LLM_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_LLM_PROVIDERS}")
        return v


class PathsConfig(BaseModel):
    """File paths configuration."""

    data_dir: Path = Path("~/vylobot/data")
    products_dir: Optional[Path] = None  # None = <data_dir>/products
    log_file: Path = Path("~/vylobot/vylobot.log")

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.data_dir = self.data_dir.expanduser()
        self.products_dir = (self.products_dir or self.data_dir / "products").expanduser()
        self.log_file = self.log_file.expanduser()
        return self


def _check_unit(name: str, v: float) -> float:
    if not 0.0 <= v <= 1.0:
        raise ValueError(f"{name} must be 0-1, got {v}")
    return v


class MatchingConfig(BaseModel):
    """Similarity thresholds for catalog, FAQ/SOP and learned lookups."""

    product_threshold: float = 0.6
    weak_threshold: float = 0.5
    word_overlap_min: float = 0.5
    char_similarity_min: float = 0.4
    faq_threshold: float = 0.6
    faq_noise_floor: float = 0.1
    learned_threshold: float = 0.6
    learned_accept: float = 0.7
    confusable_pairs: list[tuple[str, str]] = Field(
        default_factory=lambda: [tuple(p) for p in DEFAULT_CONFUSABLE_PAIRS]
    )

    @field_validator(
        "product_threshold",
        "weak_threshold",
        "word_overlap_min",
        "char_similarity_min",
        "faq_threshold",
        "faq_noise_floor",
        "learned_threshold",
        "learned_accept",
    )
    @classmethod
    def validate_threshold(cls, v: float, info) -> float:
        return _check_unit(info.field_name, v)

    @model_validator(mode="after")
    def validate_order(self):
        if self.weak_threshold > self.product_threshold:
            raise ValueError("weak_threshold must not exceed product_threshold")
        return self


class LearningConfig(BaseModel):
    """Knowledge base learning behaviour."""

    derive_from_resolvers: bool = True
    derived_confidence: float = 0.8
    auto_learn_min: float = 0.6
    max_unknown_cases: int = 200

    @field_validator("derived_confidence", "auto_learn_min")
    @classmethod
    def validate_confidence(cls, v: float, info) -> float:
        return _check_unit(info.field_name, v)


class SessionConfig(BaseModel):
    """Guided admin session lifetimes."""

    timeout_seconds: int = 600
    sweep_interval: int = 60
    cache_ttl_seconds: int = 300
    cache_max_entries: int = 1000

    @field_validator("timeout_seconds", "sweep_interval", "cache_max_entries")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"must be positive, got {v}")
        return v


class OwnerConfig(BaseModel):
    """Who may teach the bot and run admin commands."""

    owner_ids: list[str] = Field(default_factory=list)
    moderator_ids: list[str] = Field(default_factory=list)

    @field_validator("owner_ids", "moderator_ids", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        # YAML reads bare phone numbers as ints
        if isinstance(v, (str, int)):
            v = [v]
        return [str(x) for x in v or []]


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class BotConfig(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    learning: LearningConfig = Field(default_factory=LearningConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    owner: OwnerConfig = Field(default_factory=OwnerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    variant_seed: Optional[int] = None

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} patterns in API keys."""
        key = self.llm.api_key
        if key and key.startswith("${") and key.endswith("}"):
            self.llm.api_key = os.getenv(key[2:-1], "")
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "BotConfig":
        return cls.model_validate(data or {})

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
