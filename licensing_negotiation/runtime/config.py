"""
Configuration Loader
====================

Loads configuration for the licensing negotiation.
"""

import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..agents.strategies import DEFAULT_ANCHORS
from ..protocol.messages import Proposal, Role


@dataclass
class NegotiationConfig:
    """Round budget and agreement tolerance."""
    max_rounds: int = 5
    tolerance: int = 5


@dataclass
class LLMConfig:
    """Model settings for the LLM-backed roles."""
    model: str = "gemini-2.0-flash"
    temperature: float = 0.7


@dataclass
class LimitsConfig:
    """Time limits. None disables a limit."""
    call_timeout_seconds: Optional[float] = 60.0
    deadline_seconds: Optional[float] = 300.0


@dataclass
class SongConfig:
    """The song being licensed."""
    description: str = "this song is great"
    monthly_listeners: Optional[int] = 100000
    title: Optional[str] = None
    artist: Optional[str] = None


def _default_anchors() -> Dict[Role, Proposal]:
    return dict(DEFAULT_ANCHORS)


@dataclass
class DemoConfig:
    """Rule-based roles used in demo mode."""
    anchors: Dict[Role, Proposal] = field(default_factory=_default_anchors)
    concession: float = 0.5


@dataclass
class Config:
    """Complete system configuration."""
    negotiation: NegotiationConfig
    llm: LLMConfig
    limits: LimitsConfig
    song: SongConfig
    demo: DemoConfig

    @classmethod
    def default(cls) -> "Config":
        return cls(
            negotiation=NegotiationConfig(),
            llm=LLMConfig(),
            limits=LimitsConfig(),
            song=SongConfig(),
            demo=DemoConfig(),
        )

    def validate(self) -> "Config":
        """Raise ValueError on values the negotiation cannot run with."""
        if self.negotiation.max_rounds < 1:
            raise ValueError(f"max_rounds must be >= 1, got {self.negotiation.max_rounds}")
        if self.negotiation.tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {self.negotiation.tolerance}")
        for name in ("call_timeout_seconds", "deadline_seconds"):
            value = getattr(self.limits, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive or null, got {value}")
        if not 0 < self.demo.concession <= 1:
            raise ValueError(f"concession must be in (0, 1], got {self.demo.concession}")
        return self


def _load_anchors(data: dict) -> Dict[Role, Proposal]:
    anchors = _default_anchors()
    for key, value in data.items():
        role = Role(str(key).upper())
        anchors[role] = Proposal(
            licensing_cost=int(value.get("licensingCost", anchors[role].licensing_cost)),
            royalties_percent=int(value.get("royaltiesPercent", anchors[role].royalties_percent)),
            rationale=value.get("rationale", anchors[role].rationale),
        )
    return anchors


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file or return defaults.

    Args:
        config_path: Path to YAML config file (optional)

    Returns:
        Config object with all settings

    Example YAML:
        negotiation:
          max_rounds: 5
          tolerance: 5
        llm:
          model: gemini-2.0-flash
        limits:
          call_timeout_seconds: 60
          deadline_seconds: null
        song:
          description: "Upbeat synth-pop"
          monthly_listeners: 100000
    """
    if config_path is None:
        return Config.default()

    path = Path(config_path)
    if not path.exists():
        print(f"[Config] Warning: {config_path} not found, using defaults")
        return Config.default()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    negotiation_data = data.get("negotiation") or {}
    llm_data = data.get("llm") or {}
    limits_data = data.get("limits") or {}
    song_data = data.get("song") or {}
    demo_data = data.get("demo") or {}

    return Config(
        negotiation=NegotiationConfig(
            max_rounds=negotiation_data.get("max_rounds", 5),
            tolerance=negotiation_data.get("tolerance", 5),
        ),
        llm=LLMConfig(
            model=llm_data.get("model", "gemini-2.0-flash"),
            temperature=llm_data.get("temperature", 0.7),
        ),
        limits=LimitsConfig(
            call_timeout_seconds=limits_data.get("call_timeout_seconds", 60.0),
            deadline_seconds=limits_data.get("deadline_seconds", 300.0),
        ),
        song=SongConfig(
            description=song_data.get("description", "this song is great"),
            monthly_listeners=song_data.get("monthly_listeners", 100000),
            title=song_data.get("title"),
            artist=song_data.get("artist"),
        ),
        demo=DemoConfig(
            anchors=_load_anchors(demo_data.get("anchors") or {}),
            concession=demo_data.get("concession", 0.5),
        ),
    ).validate()
