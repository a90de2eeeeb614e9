#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Models module for the temperature and sales analysis.
"""

from .fixed_effects import (PanelFixedEffectsModel, fit_temperature_model, fit_robustness_model,
                            temperature_turning_point, breusch_pagan_test)
