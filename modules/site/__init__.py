"""
Site Module
Selects the configured site shape and resolves its hosted zone
"""

from .functions import create_site, resolve_zone_id
