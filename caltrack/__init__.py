# -*- coding: utf-8 -*-
"""Cal Track backend: food photo → nutrition summary."""

__version__ = "1.0.0"
