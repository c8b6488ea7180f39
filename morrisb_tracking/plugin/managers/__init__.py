"""Data access managers for the plugin.

Each module provides async functions over an ``OptionsStore``.  Managers
raise domain exceptions, never HTTP exceptions -- that translation is the
router's responsibility.
"""
