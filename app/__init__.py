# -*- coding: utf-8 -*-
"""
AdSpace Discovery Application Core Module
"""

from .config import Config

__all__ = ["Config"]
