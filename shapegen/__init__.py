"""Extract type-shape declarations from TypeScript source trees."""

from .config import ShapeGenConfig, load_config
from .pipeline import Pipeline, RunResult

__all__ = ["Pipeline", "RunResult", "ShapeGenConfig", "load_config"]

__version__ = "0.1.0"
