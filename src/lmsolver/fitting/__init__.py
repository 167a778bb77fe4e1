"""Curve fitting package - measurement files, result reporting and CLI."""

from .cli import main
from .config import ColumnNames, ModelConfig
from .data_loader import load_measurements, read_measurement_file
from .residuals import add_residual_columns, print_residual_stats, residual_stats
from .results import build_output_frame, print_fitting_results

__all__ = [
    'main',
    'ColumnNames',
    'ModelConfig',
    'load_measurements',
    'read_measurement_file',
    'add_residual_columns',
    'print_residual_stats',
    'residual_stats',
    'build_output_frame',
    'print_fitting_results',
]
