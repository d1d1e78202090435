"""
Configuration for AIMD runs.

Run parameters come from the command line; backend settings come from a
YAML file (``config.yaml`` by default). Both are validated with pydantic
and any validation problem surfaces as ConfigurationError.
"""
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from pyaimd.exceptions import ConfigurationError

from .constraints import parse_ranges

M = TypeVar("M", bound=BaseModel)


class RunParameters(BaseModel):
    """Parameters for one AIMD run."""

    input: Path = Field(..., description="Gaussian log holding the start geometry")
    time_step: float = Field(1.0, gt=0, description="Time step in fs")
    num_steps: int = Field(10000, ge=0, description="Number of integration steps")
    restart: bool = Field(False, description="Resume from the last checkpoint")
    freeze: Optional[str] = Field(
        None, description="Atoms to freeze, e.g. '1-3,7-8' (1-based)"
    )
    backend_config: Path = Field(
        Path("config.yaml"), description="YAML settings for the force backend"
    )
    work_dir: Path = Field(Path("."), description="Directory for all run files")
    seed: Optional[int] = Field(None, description="Seed for velocity sampling")

    @field_validator("freeze")
    @classmethod
    def freeze_must_parse(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            parse_ranges(v)
        return v


class GaussianSettings(BaseModel):
    """Settings for the Gaussian 16 force evaluator."""

    executable: str = Field("g16", description="Gaussian executable")
    keywords: str = Field(
        "#p force b3lyp/6-31g(d)", description="Route section, must request forces"
    )
    title: str = Field("pyaimd force evaluation", description="Title card")
    charge: int = Field(0, description="Total molecular charge")
    multiplicity: int = Field(1, ge=1, description="Spin multiplicity")
    nproc: Optional[int] = Field(None, ge=1, description="%nprocshared")
    memory: Optional[str] = Field(None, description="%mem, e.g. '4GB'")
    checkpoint: Optional[str] = Field(None, description="%chk file name")

    @field_validator("keywords")
    @classmethod
    def keywords_must_be_route(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith("#"):
            raise ValueError("Route section must start with '#'")
        return v


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        path: Path to YAML file.

    Returns:
        Dictionary with configuration.

    Raises:
        ConfigurationError: If the file is missing, unreadable or its root
            is not a mapping.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"YAML file {path} must contain a mapping at the root.")
    return content


def _validate(model: Type[M], data: Dict[str, Any]) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def load_backend_settings(path: Union[str, Path]) -> GaussianSettings:
    """Load and validate backend settings from YAML."""
    return _validate(GaussianSettings, load_yaml(path))


def build_run_parameters(**kwargs: Any) -> RunParameters:
    """
    Validate run parameters.

    Raises:
        ConfigurationError: On any invalid value.
    """
    return _validate(RunParameters, kwargs)
