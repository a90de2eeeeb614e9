#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Sample data generation for the temperature and sales analysis.
"""
