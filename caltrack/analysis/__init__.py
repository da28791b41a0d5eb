# -*- coding: utf-8 -*-
"""Image analysis domain.

Tags an uploaded photo with Imagga, decides whether it shows food, and looks the
label up in USDA FoodData Central.
"""
