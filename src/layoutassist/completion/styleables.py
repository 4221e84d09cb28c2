"""
Styleable lookup inside a package's styleable group.
"""

from typing import Optional

from layoutassist.resources.table import ConfigDescription, ResourceGroup, Styleable

DEFAULT_CONFIG = ConfigDescription()


def find_styleable(styleables: ResourceGroup, name: str) -> Optional[Styleable]:
    """
    Return the styleable declared as ``name`` in the default configuration.

    Entries that are missing, have no default value, or hold something other
    than a styleable all count as absent.
    """
    entry = styleables.find_entry(name)
    if entry is None:
        return None
    config_value = entry.find_value(DEFAULT_CONFIG)
    if config_value is None or not isinstance(config_value.value, Styleable):
        return None
    return config_value.value
