"""
Configuration management for layoutassist.

Loads settings from environment variables and provides configuration objects.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Config:
    """layoutassist configuration."""

    widgets_path: Optional[str] = None
    platform_res: Optional[str] = None
    module_res: List[str] = field(default_factory=list)
    module_package: str = "app"
    max_items: int = 100
    fuzzy_threshold: int = 70
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    json_logs: bool = False
    enable_logging: bool = False

    def __init__(self):
        """Initialize config from environment variables."""
        self.widgets_path = os.getenv("LAYOUTASSIST_WIDGETS")
        self.platform_res = os.getenv("LAYOUTASSIST_PLATFORM_RES")
        module_res = os.getenv("LAYOUTASSIST_MODULE_RES", "")
        self.module_res = [p for p in module_res.split(os.pathsep) if p]
        self.module_package = os.getenv("LAYOUTASSIST_MODULE_PACKAGE", "app")
        self.max_items = int(os.getenv("LAYOUTASSIST_MAX_ITEMS", "100"))
        self.fuzzy_threshold = int(os.getenv("LAYOUTASSIST_FUZZY_THRESHOLD", "70"))
        self.log_level = os.getenv("LAYOUTASSIST_LOG_LEVEL", "INFO")
        self.log_dir = os.getenv("LAYOUTASSIST_LOG_DIR")
        self.json_logs = os.getenv("LAYOUTASSIST_JSON_LOGS", "false").lower() == "true"
        self.enable_logging = os.getenv("LAYOUTASSIST_ENABLE_LOGGING", "false").lower() == "true"
