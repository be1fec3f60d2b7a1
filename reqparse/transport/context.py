"""Context object shared across worker threads."""

from dataclasses import dataclass
from typing import Optional

from reqparse.bootstrap.config import DriverConfig
from reqparse.lifecycle.state import ServerLifecycle


@dataclass
class WorkerContext:
    """Dependencies shared across connection workers."""

    config: DriverConfig
    lifecycle: Optional[ServerLifecycle] = None
