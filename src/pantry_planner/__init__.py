"""
Pantry Planner: pantry-aware recipe suggestions and weekly meal plans.
"""

__version__ = "0.1.0"
