# -*- coding: utf-8 -*-
"""
LangKeeper core: table diffing, source patching and the dialect registry.
"""
