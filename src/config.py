"""Chart configuration loaded from TOML."""

from dataclasses import dataclass, field, fields
from pathlib import Path
import tomllib


@dataclass
class ChartConfig:
    default_generations: int = 4
    theme: dict[str, str] = field(default_factory=dict)
    locale_dir: Path | None = None
    language: str = "en"
    base_url: str = ""
    tree_name: str = "tree"
    module_name: str = "ancestral-fan-chart"


def load_config(path: Path | None = None) -> ChartConfig:
    """
    Load a ``ChartConfig`` from a TOML file.

    Keys not present in the file keep their defaults; unknown keys are rejected.
    Example::

        default_generations = 6
        language = "de"

        [theme]
        chart-background-m = "b1cff0"
    """
    if path is None:
        return ChartConfig()

    with open(path, "rb") as f:
        data = tomllib.load(f)

    known = {f.name for f in fields(ChartConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown configuration keys in {path}: {sorted(unknown)}")

    if data.get("locale_dir") is not None:
        # Relative catalog paths are relative to the config file
        data["locale_dir"] = Path(path).parent / data["locale_dir"]

    return ChartConfig(**data)
