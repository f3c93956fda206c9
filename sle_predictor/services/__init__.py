"""
Services Package

Pipeline orchestration on top of the core modules.
"""
from .prediction import PredictionService

__all__ = ["PredictionService"]
