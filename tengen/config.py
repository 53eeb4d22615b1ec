from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from tengen.ai import HeuristicWeights
from tengen.scoring import ScoringConfig
from tengen.session import SessionConfig


@dataclass
class EngineConfig:
    heuristic: HeuristicWeights = field(default_factory=HeuristicWeights)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    session: SessionConfig = field(default_factory=SessionConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EngineConfig":
        data = data or {}
        unknown = set(data) - {"heuristic", "scoring", "session"}
        if unknown:
            raise TypeError(f"Unknown config sections: {sorted(unknown)}")
        return cls(
            heuristic=HeuristicWeights(**(data.get("heuristic") or {})),
            scoring=ScoringConfig(**(data.get("scoring") or {})),
            session=SessionConfig(**(data.get("session") or {})),
        )


def load_config(path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """Read an :class:`EngineConfig` from YAML; a missing or absent path yields defaults."""
    if path is None:
        return EngineConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return EngineConfig()
    return EngineConfig.from_dict(yaml.safe_load(cfg_path.read_text()))
