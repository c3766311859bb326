# -*- coding: utf-8 -*-
"""
LangKeeper Controllers Package

Controllers coordinate the session model with extraction, parsing and
saving, and report results to the UI layer through Qt signals.
"""

from controllers.session_controller import SessionController, SessionView

__all__ = [
    'SessionController',
    'SessionView',
]
