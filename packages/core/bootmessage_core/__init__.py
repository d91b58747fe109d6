"""Core services: settings, logging, message lookup, compositor lifecycle, orchestration."""

from .config import AppConfig, load_config, render_config
from .errors import MessageNotFound, UsageError
from .lifecycle import CompositorHandle, CompositorLifecycle, build_compositor_args, needs_restart
from .messages import MessageCatalog, MessageCategory, classify
from .orchestrator import DisplayOrchestrator, DisplayResult
from .session import DisplaySession

__all__ = [
    "AppConfig",
    "CompositorHandle",
    "CompositorLifecycle",
    "DisplayOrchestrator",
    "DisplayResult",
    "DisplaySession",
    "MessageCatalog",
    "MessageCategory",
    "MessageNotFound",
    "UsageError",
    "build_compositor_args",
    "classify",
    "load_config",
    "needs_restart",
    "render_config",
]
