"""
Configuration Loader
====================

Loads the session configuration from YAML:

    data:
      items_path: data/items.txt
      preference_paths:
        - data/preferences1.txt
        - data/preferences2.txt
    agents:
      negotiators: [engineer1, engineer2]
      mediator: mediator
    run:
      mode: sequential        # sequential | threaded
      seed: 42
      max_steps: 10000
      verbose: true

Without preference paths, each negotiator gets randomized preferences.
"""

import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional


RUN_MODES = ("sequential", "threaded")


@dataclass
class DataConfig:
    """Where items and preferences come from."""
    items_path: Optional[str] = None
    preference_paths: List[str] = field(default_factory=list)


@dataclass
class AgentsConfig:
    """Agent addresses."""
    negotiators: List[str] = field(default_factory=lambda: ["engineer1", "engineer2"])
    mediator: str = "mediator"


@dataclass
class RunConfig:
    """How to run a session."""
    mode: str = "sequential"
    seed: Optional[int] = None
    max_steps: int = 10000
    verbose: bool = True

    def __post_init__(self):
        if self.mode not in RUN_MODES:
            raise ValueError(f"Run mode must be one of {RUN_MODES}, got {self.mode!r}")
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")


@dataclass
class Config:
    """Complete session configuration."""
    data: DataConfig
    agents: AgentsConfig
    run: RunConfig

    @classmethod
    def default(cls) -> "Config":
        return cls(
            data=DataConfig(),
            agents=AgentsConfig(),
            run=RunConfig(),
        )


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from YAML file or return defaults.

    Relative data paths are resolved against the config file's directory.

    Args:
        config_path: Path to YAML config file (optional)

    Returns:
        Config object with all settings
    """
    if config_path is None:
        return Config.default()

    path = Path(config_path)
    if not path.exists():
        print(f"[Config] Warning: {config_path} not found, using defaults")
        return Config.default()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    data_section = data.get("data", {})
    agents_section = data.get("agents", {})
    run_section = data.get("run", {})

    def resolve(p: Optional[str]) -> Optional[str]:
        if p is None:
            return None
        candidate = Path(p)
        if not candidate.is_absolute():
            candidate = path.parent / candidate
        return str(candidate)

    defaults = AgentsConfig()
    return Config(
        data=DataConfig(
            items_path=resolve(data_section.get("items_path")),
            preference_paths=[resolve(p) for p in data_section.get("preference_paths", [])],
        ),
        agents=AgentsConfig(
            negotiators=list(agents_section.get("negotiators", defaults.negotiators)),
            mediator=agents_section.get("mediator", defaults.mediator),
        ),
        run=RunConfig(
            mode=run_section.get("mode", "sequential"),
            seed=run_section.get("seed"),
            max_steps=run_section.get("max_steps", 10000),
            verbose=run_section.get("verbose", True),
        ),
    )
