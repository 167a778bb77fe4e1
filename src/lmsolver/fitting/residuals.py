"""Residual computation and statistics."""

from typing import Dict, Optional

import numpy as np
import pandas as pd


def residual_stats(residuals: np.ndarray) -> Dict[str, float]:
    """RMSE、最大残差、平均残差。"""
    residuals = np.asarray(residuals, dtype=float)
    return {
        'rmse': float(np.sqrt(np.mean(residuals**2))),
        'max_abs': float(np.max(np.abs(residuals))),
        'mean_abs': float(np.mean(np.abs(residuals))),
    }


def print_residual_stats(residuals: Optional[np.ndarray], name: str) -> None:
    """打印残差统计信息。

    Args:
        residuals: 残差数组
        name: 残差类型名称
    """
    if residuals is None or len(residuals) == 0:
        return

    stats = residual_stats(residuals)
    print(f"\n  {name}残差:")
    print(f"    RMSE:     {stats['rmse']:.6e}")
    print(f"    最大残差: {stats['max_abs']:.6e}")
    print(f"    平均残差: {stats['mean_abs']:.6e}")


def add_residual_columns(
    df: pd.DataFrame,
    fitted: np.ndarray,
    residuals: np.ndarray,
    fitted_column: str,
    residual_column: str,
) -> None:
    """添加拟合值和残差列到DataFrame。"""
    if len(fitted) != len(df) or len(residuals) != len(df):
        raise ValueError("fitted values and residuals must match the DataFrame length")
    df[fitted_column] = fitted
    df[residual_column] = residuals
