# -*- coding: utf-8 -*-
"""
LangKeeper Models Package

Data models of an extraction session: usage records, the locale table,
the diff between two tables and the session state itself.
"""

from models.locale_table import UsageRecord, LocaleEntry, LocaleTable
from models.diff_result import DiffResult
from models.session_model import SessionModel

__all__ = ['UsageRecord', 'LocaleEntry', 'LocaleTable', 'DiffResult', 'SessionModel']
