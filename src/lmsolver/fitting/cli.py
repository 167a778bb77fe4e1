"""Command-line interface for curve fitting."""

import argparse
import logging
from pathlib import Path

from lmsolver.core.config import DAMPING_MODES, SolverConfig
from lmsolver.core.levenberg_marquardt import LevenbergMarquardtSolver
from lmsolver.reference import ReferenceConfig, fit_with_scipy

from .config import BACKENDS, ModelConfig
from .data_loader import load_measurements
from .results import build_output_frame, print_fitting_results


def build_parser() -> argparse.ArgumentParser:
    defaults = SolverConfig()
    parser = argparse.ArgumentParser(
        description="多项式曲线拟合 - Cholesky Levenberg-Marquardt 求解器"
    )
    parser.add_argument('--data', type=Path, action='append', required=True,
                        help='测量数据文件，每行 "x y" (可多次指定以连接多个文件)')
    parser.add_argument('--max-samples', type=int, help='限制样本数 (拼接后)')
    parser.add_argument('--degree', type=int, default=2, help='多项式次数 (默认2: a*x^2 + b*x + c)')
    parser.add_argument('--initial', type=float, nargs='+',
                        help='初始参数 (degree+1 个值，默认全为0)')
    parser.add_argument('--backend', choices=BACKENDS, default='cholesky',
                        help='cholesky=自带LM求解器；scipy=scipy.optimize.least_squares(method="lm")')
    parser.add_argument('--max-iterations', type=int, default=defaults.max_iterations,
                        help='最大迭代次数 (含被拒绝的阻尼尝试)')
    parser.add_argument('--initial-damping', type=float, default=defaults.initial_damping)
    parser.add_argument('--up-factor', type=float, default=defaults.up_factor)
    parser.add_argument('--down-factor', type=float, default=defaults.down_factor)
    parser.add_argument('--target-delta-error', type=float, default=defaults.target_delta_error,
                        help='误差变化小于该值时判定收敛')
    parser.add_argument('--damping-mode', choices=DAMPING_MODES, default=defaults.damping_mode)
    parser.add_argument('--output', type=Path, help='输出CSV文件')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='日志级别 (INFO 输出每次迭代的误差)')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    if args.max_samples is not None and args.max_samples < 1:
        parser.error(f"--max-samples must be positive, got {args.max_samples}")

    try:
        model_config = ModelConfig(degree=args.degree, initial=args.initial, backend=args.backend)
        solver_config = SolverConfig(
            max_iterations=args.max_iterations,
            initial_damping=args.initial_damping,
            up_factor=args.up_factor,
            down_factor=args.down_factor,
            target_delta_error=args.target_delta_error,
            damping_mode=args.damping_mode,
        )
    except ValueError as exc:
        parser.error(str(exc))

    print(f"{'='*60}")
    print("数据加载")
    print(f"{'='*60}")

    try:
        df, measurements = load_measurements(args.data, args.max_samples)
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(f"数据读取失败: {exc}") from exc

    model = model_config.build_model()
    x0 = model_config.initial_params()

    print(f"\n模型: {model.describe()}")
    print(f"初值: {x0}")

    if model_config.backend == 'scipy':
        print("求解器: scipy.optimize.least_squares (method='lm')")
        result = fit_with_scipy(model, measurements, x0, ReferenceConfig())
        success = result.success
    else:
        print(f"求解器: Cholesky LM ({solver_config.describe()})")
        result = LevenbergMarquardtSolver(model, measurements, solver_config).fit(x0)
        success = result.success

    print_fitting_results(result, model, measurements, model_config.names())

    if args.output:
        output_df = build_output_frame(df, model, result.parameters, measurements)
        output_df.to_csv(args.output, index=False)
        print(f"\n结果已保存到: {args.output}")

    return 0 if success else 1


if __name__ == '__main__':
    raise SystemExit(main())
