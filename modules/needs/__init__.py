# modules/needs/__init__.py

from .need import Need
