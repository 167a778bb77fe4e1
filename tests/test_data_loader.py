import numpy as np
import pytest

from lmsolver.fitting.config import ColumnNames, ModelConfig
from lmsolver.fitting.data_loader import load_measurements, read_measurement_file
from lmsolver.models import PolynomialModel, QuadraticModel


def _write(path, text):
    path.write_text(text)
    return path


def test_read_whitespace_separated_file(tmp_path):
    path = _write(tmp_path / "measurements.txt", "-1 6\n0\t1\n\n  2   3.5\n")

    df = read_measurement_file(path)

    assert list(df.columns) == ColumnNames.INPUT
    np.testing.assert_allclose(df[ColumnNames.X], [-1.0, 0.0, 2.0])
    np.testing.assert_allclose(df[ColumnNames.Y], [6.0, 1.0, 3.5])


def test_load_concatenates_and_limits(tmp_path):
    first = _write(tmp_path / "a.txt", "0 1\n1 0\n")
    second = _write(tmp_path / "b.txt", "2 3\n3 10\n")

    df, measurements = load_measurements([first, second])
    assert len(df) == 4
    assert len(measurements) == 4
    assert measurements.design.shape == (4, 1)
    np.testing.assert_allclose(measurements.targets, [1.0, 0.0, 3.0, 10.0])

    df, measurements = load_measurements([first, second], max_samples=3)
    assert len(measurements) == 3


@pytest.mark.parametrize("max_samples", [0, -1])
def test_non_positive_max_samples_raises(tmp_path, max_samples):
    path = _write(tmp_path / "a.txt", "0 1\n1 0\n2 3\n")
    with pytest.raises(ValueError):
        load_measurements([path], max_samples=max_samples)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_measurement_file(tmp_path / "missing.txt")


@pytest.mark.parametrize(
    "text",
    [
        "1 2 3\n4 5 6\n",
        "1 abc\n",
        "1 2\n3\n",
    ],
)
def test_malformed_file_raises(tmp_path, text):
    path = _write(tmp_path / "bad.txt", text)
    with pytest.raises(ValueError):
        read_measurement_file(path)


def test_empty_input_raises(tmp_path):
    path = _write(tmp_path / "empty.txt", "\n\n")
    assert len(read_measurement_file(path)) == 0
    with pytest.raises(ValueError):
        load_measurements([path])


def test_model_config():
    config = ModelConfig()
    assert isinstance(config.build_model(), QuadraticModel)
    assert config.initial_params() == [0.0, 0.0, 0.0]
    assert config.names() == ["a", "b", "c"]

    cubic = ModelConfig(degree=3, initial=[1.0, 2.0, 3.0, 4.0])
    assert isinstance(cubic.build_model(), PolynomialModel)
    assert cubic.build_model().num_params() == 4

    with pytest.raises(ValueError):
        ModelConfig(degree=2, initial=[1.0])
    with pytest.raises(ValueError):
        ModelConfig(backend="eigen")
