"""Typed configuration dataclasses for link-shrink.

Provides strongly-typed configuration objects mirroring the dict returned by
load_config().
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any


@dataclass
class ChartConfig:
    """Default QR code / chart rendering options."""
    image_size: Dict[str, int] = field(default_factory=lambda: {"width": 150, "height": 150})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OutputConfig:
    """CLI output options."""
    json: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AppConfig:
    """Root application configuration with all subsections."""
    log_level: str = "INFO"
    provider: str | None = None
    plugins: List[str] = field(default_factory=list)
    chart: ChartConfig = field(default_factory=ChartConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary matching load_config() output."""
        return {
            "log_level": self.log_level,
            "provider": self.provider,
            "plugins": list(self.plugins),
            "chart": self.chart.to_dict(),
            "output": self.output.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create AppConfig from a configuration dict.

        Unknown keys are ignored; missing keys fall back to defaults.
        """
        chart = data.get("chart", {}) or {}
        output = data.get("output", {}) or {}
        image_size = chart.get("image_size") or {}
        return cls(
            log_level=str(data.get("log_level", "INFO")),
            provider=data.get("provider"),
            plugins=list(data.get("plugins") or []),
            chart=ChartConfig(
                image_size={
                    "width": int(image_size.get("width", 150)),
                    "height": int(image_size.get("height", 150)),
                }
            ),
            output=OutputConfig(json=bool(output.get("json", False))),
        )


__all__ = ["AppConfig", "ChartConfig", "OutputConfig"]
