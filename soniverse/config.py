"""
Top-level Soniverse configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from soniverse.realtime.config import VoiceConfig
from soniverse.synthesis.config import RenderConfig


@dataclass
class Config:
    """Soniverse configuration.

    Bundles render and voice pool settings with the export directory.
    """
    render: RenderConfig = field(default_factory=RenderConfig)
    voice: VoiceConfig = field(default_factory=VoiceConfig)
    output_dir: Path = field(default_factory=lambda: Path(os.environ.get("SONIVERSE_OUTPUT", "output")))

    def __post_init__(self):
        self.output_dir = Path(self.output_dir)

    @classmethod
    def from_env(cls) -> "Config":
        """Defaults overridden by SONIVERSE_* environment variables."""
        config = cls()
        overrides = {}
        if "SONIVERSE_SAMPLE_RATE" in os.environ:
            overrides["sample_rate"] = int(os.environ["SONIVERSE_SAMPLE_RATE"])
        if "SONIVERSE_POOL_SIZE" in os.environ:
            overrides["pool_size"] = int(os.environ["SONIVERSE_POOL_SIZE"])
        if "SONIVERSE_FADE_TIME" in os.environ:
            overrides["fade_time"] = float(os.environ["SONIVERSE_FADE_TIME"])
        if overrides:
            config.voice = replace(config.voice, **overrides)
        return config

    def with_sample_rate(self, sample_rate: int) -> "Config":
        """Copy of this config playing at ``sample_rate``."""
        return replace(self, voice=replace(self.voice, sample_rate=sample_rate))
