"""Batch Generator: parallel blur of images listed in a CSV manifest."""

import csv
import logging
import traceback
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional, List

from tqdm import tqdm

from ..core import BlurConfig, BlurParams, BlurEngine, InvalidStepsError
from ..codecs import ImageCodec

logger = logging.getLogger(__name__)


@dataclass
class SampleSpec:
    """One manifest row."""
    sample_id: str
    input: str
    output: str
    params: BlurParams


def _process_sample(
    spec: SampleSpec,
    input_root: Path,
    output_root: Path,
    cfg_dict: Dict[str, Any],
) -> Dict[str, Any]:
    """Process a single sample (worker function)."""
    try:
        cfg = BlurConfig.from_dict(cfg_dict)
        engine = BlurEngine(cfg)

        image = ImageCodec.load(input_root / spec.input)
        blurred = engine.blur_params(image, spec.params)
        ImageCodec.save(output_root / spec.output, blurred)

        return {"sample_id": spec.sample_id, "status": "success"}

    except Exception as e:
        return {
            "sample_id": spec.sample_id,
            "status": "error",
            "error": str(e),
            "traceback": traceback.format_exc(),
        }


class BatchBlurGenerator:
    """Blur every image listed in a CSV manifest.

    Manifest columns: ``sample_id, input, output`` and optionally
    ``sigma_x, sigma_y, steps``. Empty or missing parameter cells fall back
    to the config. Paths are relative to ``input_root``/``output_root``.
    """

    def __init__(
        self,
        csv_path: Path,
        input_root: Path,
        output_root: Path,
        config: Optional[BlurConfig] = None,
    ):
        self.csv_path = Path(csv_path)
        self.input_root = Path(input_root)
        self.output_root = Path(output_root)
        self.config = (config or BlurConfig()).validate()

        self.samples = self._load_csv()

    def _cell(self, row: Dict[str, str], key: str, default):
        value = row.get(key)
        if value is None or value.strip() == "":
            return default
        return value

    def _load_csv(self) -> List[SampleSpec]:
        """Load samples from CSV. Bad parameters fail here, not in a worker."""
        samples = []
        with open(self.csv_path, newline="") as f:
            reader = csv.DictReader(f)
            for i, row in enumerate(reader):
                sample_id = self._cell(row, "sample_id", f"{i:06d}")
                raw_steps = self._cell(row, "steps", self.config.steps)
                try:
                    steps = float(raw_steps)
                except ValueError:
                    raise InvalidStepsError(f"{sample_id}: steps must be a positive integer, got {raw_steps!r}")
                # check_sigma parses the cell text
                params = BlurParams(
                    sigma_x=self._cell(row, "sigma_x", self.config.sigma_x),
                    sigma_y=self._cell(row, "sigma_y", self.config.sigma_y),
                    steps=int(steps) if steps.is_integer() else steps,
                ).validate()
                samples.append(SampleSpec(
                    sample_id=sample_id,
                    input=row["input"],
                    output=row["output"],
                    params=params,
                ))
        return samples

    def generate(
        self,
        num_workers: Optional[int] = None,
        skip_existing: Optional[bool] = None,
        progress: bool = True,
    ) -> Dict[str, Any]:
        """Blur the manifest.

        Args:
            num_workers: parallel worker processes (config default if None)
            skip_existing: skip rows whose output exists (config default if None)
            progress: show progress bar

        Returns:
            dict with generation statistics
        """
        num_workers = self.config.workers if num_workers is None else num_workers
        skip_existing = self.config.skip_existing if skip_existing is None else skip_existing

        samples_to_process = []
        for spec in self.samples:
            if skip_existing and (self.output_root / spec.output).exists():
                continue
            samples_to_process.append(spec)

        results = {
            "total": len(self.samples),
            "processed": 0,
            "skipped": len(self.samples) - len(samples_to_process),
            "errors": [],
        }
        if not samples_to_process:
            return results

        cfg_dict = self.config.to_dict()

        if num_workers <= 1:
            iterator = tqdm(samples_to_process, desc="Blurring") if progress else samples_to_process
            for spec in iterator:
                self._record(results, _process_sample(spec, self.input_root, self.output_root, cfg_dict))
        else:
            # worker processes always run on the CPU
            cfg_dict["device"] = "cpu"
            with ProcessPoolExecutor(max_workers=num_workers) as executor:
                futures = {
                    executor.submit(_process_sample, spec, self.input_root, self.output_root, cfg_dict): spec
                    for spec in samples_to_process
                }
                iterator = tqdm(as_completed(futures), total=len(futures), desc="Blurring") if progress else as_completed(futures)
                for future in iterator:
                    self._record(results, future.result())

        logger.info(
            "Batch done: %d processed, %d skipped, %d errors",
            results["processed"], results["skipped"], len(results["errors"]),
        )
        return results

    @staticmethod
    def _record(results: Dict[str, Any], result: Dict[str, Any]) -> None:
        if result["status"] == "success":
            results["processed"] += 1
        else:
            logger.warning("Sample %s failed: %s", result["sample_id"], result["error"])
            results["errors"].append(result)

    def generate_single(self, sample_id: str) -> Dict[str, Any]:
        """Blur a single sample by ID."""
        spec = next((s for s in self.samples if s.sample_id == sample_id), None)
        if spec is None:
            return {"sample_id": sample_id, "status": "error", "error": f"Sample {sample_id} not found"}

        return _process_sample(spec, self.input_root, self.output_root, self.config.to_dict())
