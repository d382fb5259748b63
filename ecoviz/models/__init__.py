"""EcoViz — Database Models"""

from ecoviz.models.calculation import Calculation

__all__ = ["Calculation"]
