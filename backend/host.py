"""Host wiring: builds the file memory and installs it as the active memory backend."""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from config import Settings, get_settings
from repositories import FileMemory, MemoryProtocol
from schemas import MemoryOptions


class HostConfig:
    """What a host exposes to its modules: named loggers and a memory slot."""

    def __init__(self, name: str, logger: Optional[logging.Logger] = None):
        self.name = name
        self._logger = logger or logging.getLogger(name)
        self.memory: Optional[MemoryProtocol] = None

    def logger(self, name: str) -> logging.Logger:
        return self._logger.getChild(name)

    def set_memory(self, memory: MemoryProtocol) -> None:
        self.memory = memory


Module = Callable[[HostConfig], None]


def file_memory(path: Union[str, Path]) -> Module:
    """
    Host module that stores all memories as a JSON object in the file at path.

    An existing file is loaded when the module is applied; if it cannot be
    opened or decoded the StoreError propagates and no memory is installed.
    """
    def module(conf: HostConfig) -> None:
        memory = FileMemory(MemoryOptions(path=path, logger=conf.logger("memory")))
        conf.set_memory(memory)

    return module


def get_memory(conf: HostConfig) -> MemoryProtocol:
    """Return the installed memory or raise if no module provided one."""
    if conf.memory is None:
        raise RuntimeError(f"Host '{conf.name}' has no memory configured")
    return conf.memory


def configure_logging(settings: Optional[Settings] = None) -> None:
    s = settings or get_settings()
    logging.basicConfig(level=s.LOG_LEVEL)


def build_host(settings: Optional[Settings] = None) -> HostConfig:
    """Create a host from settings with the file memory installed."""
    s = settings or get_settings()
    s.MEMORY_PATH.parent.mkdir(parents=True, exist_ok=True)
    conf = HostConfig(s.APP_TITLE)
    file_memory(s.MEMORY_PATH)(conf)
    return conf
