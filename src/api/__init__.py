#!/usr/bin/env python3
"""
HTTP API for the text analysis service.
"""

from .app import create_app

__all__ = ['create_app']
