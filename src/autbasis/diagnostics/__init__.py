"""Diagnostics module for analysis results."""

from autbasis.diagnostics.growth import (
    ComponentWitness,
    Growth,
    GrowthType,
    Obstruction,
    ResidueAssignment,
)
from autbasis.diagnostics.report import AnalysisReport, Summary, format_order

__all__ = [
    "ComponentWitness",
    "Growth",
    "GrowthType",
    "Obstruction",
    "ResidueAssignment",
    "AnalysisReport",
    "Summary",
    "format_order",
]
