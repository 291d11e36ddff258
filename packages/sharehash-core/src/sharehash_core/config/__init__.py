from .loader import load_config
from .models import EnvelopeConfig, ShareHashConfig

__all__ = [
    "EnvelopeConfig",
    "ShareHashConfig",
    "load_config",
]
