"""Data loading utilities."""

from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from lmsolver.core.measurements import MeasurementSet

from .config import ColumnNames


def read_measurement_file(path: Path) -> pd.DataFrame:
    """读取单个测量文件 (每行 ``x y``，空白分隔，无表头)。

    Args:
        path: 文件路径

    Returns:
        包含 x, y 两列的 DataFrame
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"{path} could not be read")

    try:
        df = pd.read_csv(
            path,
            sep=r'\s+',
            header=None,
            comment='#',
            skip_blank_lines=True,
            dtype=float,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame({col: pd.Series(dtype=float) for col in ColumnNames.INPUT})
    except (ValueError, pd.errors.ParserError) as exc:
        raise ValueError(f"{path}: malformed measurement data ({exc})") from exc

    if df.shape[1] != len(ColumnNames.INPUT):
        raise ValueError(
            f"{path}: expected {len(ColumnNames.INPUT)} columns (x y), got {df.shape[1]}"
        )
    df.columns = ColumnNames.INPUT
    if df.isna().any().any():
        raise ValueError(f"{path}: missing values in measurement data")
    return df


def load_measurements(
    paths: List[Path],
    max_samples: Optional[int] = None,
) -> Tuple[pd.DataFrame, MeasurementSet]:
    """Load and concatenate measurements from multiple files."""
    if max_samples is not None and max_samples < 1:
        raise ValueError(f"max_samples must be positive, got {max_samples}")

    dfs = []

    print(f"\n加载 {len(paths)} 个数据文件:")
    for i, path in enumerate(paths):
        df = read_measurement_file(path)
        print(f"  文件 {i+1}: {Path(path).name} ({len(df)} 条数据)")
        dfs.append(df)

    df = pd.concat(dfs, ignore_index=True)

    if max_samples is not None and len(df) > max_samples:
        df = df.iloc[:max_samples].copy()
        print(f"  限制到前 {max_samples} 条数据")

    if len(df) == 0:
        raise ValueError("no measurements found")

    print(f"  总样本数: {len(df)}")

    measurements = MeasurementSet.from_xy(
        df[ColumnNames.X].to_numpy(dtype=np.float64),
        df[ColumnNames.Y].to_numpy(dtype=np.float64),
    )
    return df, measurements
