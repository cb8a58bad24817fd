"""Pydantic v2 configuration for snapshot export.

The configuration is immutable for the lifetime of a run: the grid extents and
timestep size are shared read-only by every export call.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

# Environment variable naming the output directory.
OUT_PATH_ENV = "MAXOL_OUT_PATH"


class ExportConfig(BaseModel):
    """Grid, time, and output settings shared by all snapshot exports."""

    model_config = ConfigDict(frozen=True)

    extents: Tuple[int, int, int] = Field(
        ..., description="Number of nodes along the (p, q, r) axes"
    )
    dt: float = Field(..., gt=0, description="Time advanced per solver step")
    out_path: Path = Field(Path("."), description="Directory receiving records")
    byte_order: Literal["=", "<", ">"] = Field(
        "=",
        description="Byte order of record values: '=' host, '<' little, '>' big",
    )
    max_path_length: int = Field(
        1023, gt=0, description="Maximum length of a record path [bytes]"
    )

    @field_validator("extents")
    @classmethod
    def check_extents(cls, v: Tuple[int, int, int]) -> Tuple[int, int, int]:
        if any(n < 2 for n in v):
            raise ValueError(f"extents must be at least 2 along each axis, got {v}")
        return v

    @property
    def size(self) -> int:
        """Number of nodes in the grid."""
        pp, qq, rr = self.extents
        return pp * qq * rr

    @classmethod
    def from_env(cls, **fields) -> ExportConfig:
        """Config with ``out_path`` taken from ``MAXOL_OUT_PATH`` when set."""
        out_path = os.environ.get(OUT_PATH_ENV)
        if out_path:
            fields.setdefault("out_path", out_path)
        else:
            logger.debug("%s not set, writing to %s", OUT_PATH_ENV, Path("."))
        return cls(**fields)

    @classmethod
    def from_file(cls, path: str | Path) -> ExportConfig:
        """Load configuration from a JSON file."""
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def to_json(self, path: str | Path | None = None) -> str:
        """Serialize to JSON, optionally writing to ``path``."""
        out = self.model_dump_json(indent=2)
        if path is not None:
            Path(path).write_text(out)
        return out
