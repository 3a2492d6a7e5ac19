"""Configuration and on-disk models for the file memory."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter

# Backing file content: a flat JSON object of string keys to string values.
Snapshot = TypeAdapter(dict[str, str])


class MemoryOptions(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    path: Path
    logger: Optional[logging.Logger] = None
