"""
Configuration modules for scenario generation.
"""

from .province_templates import get_templates, list_template_sets, TEMPLATE_SETS
from .settings import Settings, settings

__all__ = ['get_templates', 'list_template_sets', 'TEMPLATE_SETS', 'Settings', 'settings']
