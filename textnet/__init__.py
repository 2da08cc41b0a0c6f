"""
textnet: part/chapter segmentation, tokenization and word / character
co-occurrence networks for long texts.
"""
from .config import PipelineConfig

__all__ = ["PipelineConfig"]

__version__ = "0.1.0"
