# smart_tremolo/config/models.py

"""
Pydantic models for the structure and validation of the SmartTremolo
configuration (smart_tremolo.toml). Uses Pydantic V2 syntax.
"""

from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from smart_tremolo.core.lfo import LFOShape, lookup_shape

# --- Helper Functions ---

def _resolve_path(path: Union[str, Path]) -> Path:
    """Resolves and expands user paths."""
    return Path(path).expanduser().resolve()

# --- Model Definitions ---

class TremoloParams(BaseModel):
    """Default tremolo parameters (overridable from the CLI)."""
    rate_hz: float = Field(5.0, gt=0, allow_inf_nan=False, description="LFO rate in Hz.")
    depth: float = Field(0.6, ge=0.0, le=1.0, allow_inf_nan=False, description="Modulation depth (0 = none, 1 = full).")
    wet: float = Field(1.0, ge=0.0, le=1.0, allow_inf_nan=False, description="Wet/dry mix (0 = dry, 1 = fully processed).")
    stereo_phase_deg: float = Field(0.0, ge=0.0, le=180.0, allow_inf_nan=False, description="Right-channel LFO offset in degrees.")
    shape: str = Field("sine", description="LFO shape: sine, triangle, square or square-soft.")

    @field_validator('shape')
    @classmethod
    def check_shape(cls, value: str) -> str:
        """Validate the shape name and normalise it to its canonical spelling."""
        shape = lookup_shape(value)
        if shape is None:
            allowed = sorted(s.value for s in LFOShape)
            raise ValueError(f"Invalid LFO shape '{value}'. Must be one of {allowed}")
        return shape.value

class ProcessingConfig(BaseModel):
    """Block processing and file defaults."""
    block_size: int = Field(512, gt=0, description="Frames per processing block.")
    default_input: Path = Field(default=Path("assets/input.wav"), description="Input file used when --in is omitted.")
    default_output: Path = Field(default=Path("assets/output.wav"), description="Output file used when --out is omitted.")
    test_pad_seconds: float = Field(10.0, gt=0, allow_inf_nan=False, description="Length of the generated test pad.")
    test_pad_sample_rate: int = Field(44100, gt=0, description="Sample rate of the generated test pad.")
    output_subtype: str = Field("PCM_16", description="Soundfile subtype for written WAV files.")

class PathsConfig(BaseModel):
    """Configuration for file paths used by SmartTremolo."""
    log_directory: Path = Field(default=Path("./smart_tremolo_logs"), description="Directory for log files.")

    @field_validator('log_directory', mode='before')
    @classmethod
    def resolve_paths_before_validation(cls, value: Any) -> Any:
        """Resolves paths before Pydantic validates them."""
        if isinstance(value, (str, Path)):
            return _resolve_path(value)
        return value

class LoggingConfig(BaseModel):
    """Logging configuration settings."""
    log_file_enabled: bool = Field(False, description="Enable/disable persistent file logging.")
    log_filename_template: str = Field("smart_tremolo_{timestamp:%Y%m%d_%H%M%S}.log", description="Naming pattern for log files.")
    log_level_file: str = Field("DEBUG", description="Minimum level for file logs (DEBUG, INFO, WARNING, ERROR, CRITICAL).")
    log_format: str = Field("%(asctime)s [%(levelname)-8s] %(name)-30s - %(message)s", description="Format string for file log entries.")

    @field_validator('log_level_file')
    @classmethod
    def check_log_level(cls, value: str) -> str:
        """Validate log level strings."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in allowed_levels:
            raise ValueError(f"Invalid log level '{value}'. Must be one of {allowed_levels}")
        return upper_value

class TremoloConfig(BaseModel):
    """Root configuration model for SmartTremolo."""
    model_config = ConfigDict(
        extra='ignore',
        validate_assignment=True
    )

    tremolo: TremoloParams = Field(default_factory=TremoloParams)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
