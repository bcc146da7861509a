"""Load and validate KSS parsing options and project configuration.

This subpackage turns either keyword options or a ``kss.yaml`` project file
into :class:`ParseOptions`, the settings consumed by
:func:`kss_docs.parse` and :func:`kss_docs.traverse`. The primary entry point
for files is :func:`load_kss_config`, which validates the source directories
and applies defaults.

Examples
--------
>>> from kss_docs.config import ParseOptions
>>> ParseOptions.from_mapping({"markdown": False, "custom": ["Colors"]}).custom
('Colors',)
"""

from .loader import load_kss_config
from .models import KssConfig, KssConfigError, ParseOptions

__all__ = ["KssConfig", "KssConfigError", "ParseOptions", "load_kss_config"]
