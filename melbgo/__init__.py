"""MelbGo - shared itinerary, expenses and checklist for the Melbourne trip"""

__version__ = "1.0.0"
