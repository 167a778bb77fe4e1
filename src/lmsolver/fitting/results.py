"""Results printing and output frame assembly."""

from typing import List, Union

import numpy as np
import pandas as pd

from lmsolver.core.levenberg_marquardt import FitResult
from lmsolver.core.measurements import MeasurementSet
from lmsolver.core.normal_equations import residuals as compute_residuals
from lmsolver.reference import ReferenceResult

from .config import ColumnNames
from .residuals import add_residual_columns, print_residual_stats


def describe_result(result: Union[FitResult, ReferenceResult]) -> str:
    if isinstance(result, FitResult):
        return (
            f"{result.status.value} ({result.message}), "
            f"迭代次数: {result.iterations}, 最终λ: {result.damping:.3e}"
        )
    return f"success={result.success} ({result.message}), 函数评估次数: {result.nfev}"


def print_fitting_results(
    result: Union[FitResult, ReferenceResult],
    model,
    measurements: MeasurementSet,
    names: List[str],
) -> np.ndarray:
    """Print fitted coefficients and residual statistics.

    Returns:
        Residuals ``y - f`` at the fitted parameters
    """
    print(f"\n{'='*60}")
    print("拟合结果")
    print(f"{'='*60}")
    print(f"状态: {describe_result(result)}")
    print(f"最终误差 (SSE): {result.error:.6e}")
    print(f"平均误差:       {result.error / len(measurements):.6e}")

    print("\nOpt result")
    for name, value in zip(names, result.parameters):
        print(f"\t{name}: {value:.10g}")

    residuals = compute_residuals(model, result.parameters, measurements)
    print_residual_stats(residuals, "拟合")
    return residuals


def build_output_frame(
    df: pd.DataFrame,
    model,
    parameters: np.ndarray,
    measurements: MeasurementSet,
) -> pd.DataFrame:
    """Copy of the input frame with fitted values and residuals appended."""
    output_df = df.reset_index(drop=True).copy()
    fitted = np.array([model.evaluate(parameters, x) for x in measurements.design])
    add_residual_columns(
        output_df,
        fitted,
        measurements.targets - fitted,
        ColumnNames.Y_FITTED,
        ColumnNames.RESIDUAL,
    )
    return output_df
