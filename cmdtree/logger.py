# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Cmdtree."""
import logging

logger: logging.Logger = logging.getLogger("cmdtree")
