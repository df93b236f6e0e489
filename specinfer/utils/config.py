"""
Configuration management for specinfer.
Supports YAML configuration files.
"""

import yaml
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from pathlib import Path


@dataclass
class CheckConfig:
    """Configuration for check-program construction."""
    # Record boolean snapshot values through explicit branches
    use_branching: bool = False
    temporary_base: str = "t"
    label_base: str = "s"
    method_base: str = "check"


@dataclass
class Config:
    """Main configuration class for specinfer."""

    check: CheckConfig = field(default_factory=CheckConfig)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "check": {
                "use_branching": self.check.use_branching,
                "temporary_base": self.check.temporary_base,
                "label_base": self.check.label_base,
                "method_base": self.check.method_base,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary."""
        config = cls()

        config.log_level = data.get("log_level", config.log_level)
        config.log_file = data.get("log_file", config.log_file)

        if "check" in data:
            check_data = data["check"] or {}
            config.check = CheckConfig(
                use_branching=check_data.get("use_branching", False),
                temporary_base=check_data.get("temporary_base", "t"),
                label_base=check_data.get("label_base", "s"),
                method_base=check_data.get("method_base", "check"),
            )

        return config


def load_config(config_path: str) -> Config:
    """Load configuration from YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    return Config.from_dict(data or {})


def save_config(config: Config, config_path: str) -> None:
    """Save configuration to YAML file."""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
