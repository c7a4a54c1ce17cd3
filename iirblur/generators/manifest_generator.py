"""Manifest Generator: write CSV blur manifests from a YAML spec."""

import csv
import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

import numpy as np
import yaml

logger = logging.getLogger(__name__)


@dataclass
class SamplingSpec:
    """Specification for parameter sampling."""
    distribution: str = "uniform"  # "uniform" | "normal" | "fixed"
    min_val: float = 0.0
    max_val: float = 1.0
    mean: float = 0.5
    std: float = 0.1
    value: Optional[float] = None  # for "fixed"

    def sample(self, rng: np.random.Generator) -> float:
        if self.distribution == "fixed":
            return self.value if self.value is not None else self.mean
        elif self.distribution == "uniform":
            return float(rng.uniform(self.min_val, self.max_val))
        elif self.distribution == "normal":
            val = float(rng.normal(self.mean, self.std))
            return float(np.clip(val, self.min_val, self.max_val))
        else:
            raise ValueError(f"Unknown distribution: {self.distribution}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SamplingSpec":
        return cls(
            distribution=d.get("distribution", "uniform"),
            min_val=d.get("min", 0.0),
            max_val=d.get("max", 1.0),
            mean=d.get("mean", (d.get("min", 0.0) + d.get("max", 1.0)) / 2),
            std=d.get("std", 0.1),
            value=d.get("value"),
        )


@dataclass
class SourceSpec:
    """Where the input images live."""
    root: str
    pattern: str = "*.png"
    recursive: bool = True


@dataclass
class OutputSpec:
    """How output paths are formed, relative to the batch output root."""
    subdir: str = "blur"
    suffix: str = ".png"


class ManifestGenerator:
    """Generate CSV manifests for BatchBlurGenerator.

    YAML config format:
    ```yaml
    source:
      root: /path/to/images
      pattern: "*.png"

    output:
      subdir: blur
      suffix: .png

    params:
      sigma_x:
        distribution: uniform
        min: 2.0
        max: 8.0
      sigma_y:
        distribution: fixed
        value: 8.0
      steps:
        distribution: fixed
        value: 4

    generation:
      seed: 42
      max_samples: 1000
    ```
    """

    COLUMNS = ["sample_id", "input", "output", "sigma_x", "sigma_y", "steps"]
    PARAM_COLUMNS = ["sigma_x", "sigma_y", "steps"]

    DEFAULT_SPECS = {
        "sigma_x": {"distribution": "fixed", "value": 8.0},
        "sigma_y": {"distribution": "fixed", "value": 8.0},
        "steps": {"distribution": "fixed", "value": 4},
    }

    def __init__(self, config: Union[str, Path, Dict[str, Any]]):
        """Initialize generator from a YAML path or an already-parsed dict."""
        if isinstance(config, dict):
            self.config = config
        else:
            with open(config) as f:
                self.config = yaml.safe_load(f)

        source = self.config["source"]
        self.source = SourceSpec(
            root=source["root"],
            pattern=source.get("pattern", "*.png"),
            recursive=source.get("recursive", True),
        )

        output = self.config.get("output", {})
        self.output = OutputSpec(
            subdir=output.get("subdir", "blur"),
            suffix=output.get("suffix", ".png"),
        )

        params = self.config.get("params") or {}
        self.param_specs = {
            name: SamplingSpec.from_dict(params.get(name, self.DEFAULT_SPECS[name]))
            for name in self.PARAM_COLUMNS
        }

        gen_cfg = self.config.get("generation", {})
        self.seed = gen_cfg.get("seed", 42)
        self.max_samples = gen_cfg.get("max_samples", None)

    def _discover(self) -> List[Path]:
        root = Path(self.source.root)
        if not root.is_dir():
            raise FileNotFoundError(f"Source root not found: {root}")
        found = root.rglob(self.source.pattern) if self.source.recursive else root.glob(self.source.pattern)
        return sorted(p.relative_to(root) for p in found if p.is_file())

    def _sample_row(self, rel: Path, rng: np.random.Generator) -> Dict[str, Any]:
        sample_id = hashlib.md5(rel.as_posix().encode()).hexdigest()[:12]
        row = {
            "sample_id": sample_id,
            "input": rel.as_posix(),
            "output": (Path(self.output.subdir) / rel.with_suffix(self.output.suffix)).as_posix(),
        }
        for name in self.PARAM_COLUMNS:
            row[name] = self.param_specs[name].sample(rng)
        row["steps"] = int(round(row["steps"]))
        return row

    def generate(self, output_csv: Union[str, Path]) -> int:
        """Write the manifest.

        Args:
            output_csv: path to output CSV

        Returns:
            number of rows written
        """
        rng = np.random.default_rng(self.seed)

        inputs = self._discover()
        if self.max_samples is not None and len(inputs) > self.max_samples:
            indices = rng.choice(len(inputs), self.max_samples, replace=False)
            inputs = [inputs[i] for i in sorted(indices)]

        output_csv = Path(output_csv)
        output_csv.parent.mkdir(parents=True, exist_ok=True)

        with open(output_csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=self.COLUMNS)
            writer.writeheader()
            for rel in inputs:
                writer.writerow(self._sample_row(rel, rng))

        logger.info("Wrote %d manifest rows to %s", len(inputs), output_csv)
        return len(inputs)
