# -*- coding: utf-8 -*-
"""
AdSpace Discovery Data Models
"""

from .coordinate import Coordinate
from .advertising_area import AdvertisingArea, RateInfo
from .property import Property

__all__ = [
    "Coordinate",
    "AdvertisingArea",
    "RateInfo",
    "Property",
]
