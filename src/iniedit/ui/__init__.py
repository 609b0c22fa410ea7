"""User interface helpers for iniedit.

The :mod:`iniedit.ui.core` module holds a toolkit independent session
layer; :mod:`iniedit.ui.tk` is a small tkinter front end built on it.
"""

from __future__ import annotations

__all__ = ["core", "state", "tk"]
