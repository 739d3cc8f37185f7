"""Tests for the adview CLI."""

import csv
import io
import warnings

import pytest
from click.testing import CliRunner

from adview.cli.main import cli

from .conftest import CELLS, GENES


@pytest.fixture
def runner(restore_root_logger):
    return CliRunner()


def _lines(result):
    return result.output.splitlines()


def test_obs_head(runner, h5ad_path):
    """obs-head prints the header and the first n rows tab-separated."""
    result = runner.invoke(cli, ["obs-head", h5ad_path, "-n", "2"])
    assert result.exit_code == 0, result.output
    assert _lines(result) == [
        "cell_id\tn_genes\tcell_type",
        f"{CELLS[0]}\t1021\tT cell",
        f"{CELLS[1]}\t877\tB cell",
    ]


def test_head_alias_and_default_lines(runner, h5ad_path):
    """The short alias works and defaults to the configured line count."""
    result = runner.invoke(cli, ["oh", h5ad_path])
    assert result.exit_code == 0, result.output
    assert len(_lines(result)) == 1 + len(CELLS)


def test_head_lines_from_config(runner, h5ad_path, tmp_path):
    """output.head_lines sets the default -n."""
    config = tmp_path / "adview.yaml"
    config.write_text("output:\n  head_lines: 1\n")
    result = runner.invoke(cli, ["-c", str(config), "vh", h5ad_path])
    assert result.exit_code == 0, result.output
    assert _lines(result) == ["gene_name\tgene_ids\tn_cells", f"{GENES[0]}\tENSG00000243485\t0"]


def test_obs_all_streams_in_chunks(runner, h5ad_path, tmp_path):
    """obs-all prints every row regardless of chunk size."""
    config = tmp_path / "adview.yaml"
    config.write_text("reader:\n  chunk_size: 2\n")
    result = runner.invoke(cli, ["-c", str(config), "obs-all", h5ad_path])
    assert result.exit_code == 0, result.output
    lines = _lines(result)
    assert len(lines) == 1 + len(CELLS)
    assert [line.split("\t")[0] for line in lines[1:]] == CELLS


def test_var_all(runner, h5ad_path):
    result = runner.invoke(cli, ["va", h5ad_path])
    assert result.exit_code == 0, result.output
    assert [line.split("\t")[0] for line in _lines(result)[1:]] == GENES


def test_shape(runner, h5ad_path):
    result = runner.invoke(cli, ["shape", h5ad_path])
    assert result.exit_code == 0, result.output
    assert _lines(result) == ["obs shape: 5", "var shape: 3"]


def test_field(runner, h5ad_path):
    result = runner.invoke(cli, ["f", h5ad_path])
    assert result.exit_code == 0, result.output
    assert _lines(result) == [
        "obs fields:",
        "\tcell_id (string-array)",
        "\tn_genes (array)",
        "\tcell_type (categorical)",
        "",
        "var fields:",
        "\tgene_name (string-array)",
        "\tgene_ids (string-array)",
        "\tn_cells (array)",
    ]


def test_column_listing(runner, h5ad_path):
    """column numbers rows from start + 1."""
    result = runner.invoke(
        cli, ["column", h5ad_path, "--name", "cell_type", "--start", "2", "-n", "2"]
    )
    assert result.exit_code == 0, result.output
    assert _lines(result) == ["3: T cell", "4: NK cell"]


def test_column_unknown_field(runner, h5ad_path):
    result = runner.invoke(cli, ["c", h5ad_path, "--name", "nope"])
    assert result.exit_code != 0
    assert "nope" in result.output


def test_export_to_file(runner, h5ad_path, tmp_path):
    """export writes CSV with the table's header order."""
    target = tmp_path / "obs.csv"
    result = runner.invoke(cli, ["export", h5ad_path, "-o", str(target)])
    assert result.exit_code == 0, result.output

    with open(target, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["cell_id", "n_genes", "cell_type"]
    assert [row[0] for row in rows[1:]] == CELLS
    assert rows[4] == [CELLS[3], "1533", "NK cell"]


def test_export_to_stdout_with_range(runner, h5ad_path):
    result = runner.invoke(cli, ["e", h5ad_path, "--group", "var", "--start", "1", "-n", "5"])
    assert result.exit_code == 0, result.output
    rows = list(csv.reader(io.StringIO(result.output)))
    assert rows[0] == ["gene_name", "gene_ids", "n_cells"]
    assert [row[0] for row in rows[1:]] == GENES[1:]


def test_export_to_stdout_without_deprecated_streams(runner, h5ad_path):
    """Writing CSV to stdout raises no deprecation warnings."""
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        result = runner.invoke(cli, ["export", h5ad_path, "-n", "1"])
    assert result.exit_code == 0, result.output
    assert len(list(csv.reader(io.StringIO(result.output)))) == 2


@pytest.fixture
def ragged_path(make_h5ad):
    """A table whose second field has fewer rows than the first."""
    return make_h5ad(
        [
            ("a", "strings", ["x", "y", "z"]),
            ("b", "integers", [1]),
        ]
    )


def test_obs_all_short_field(runner, ragged_path):
    """Rows beyond a short field's length are not printed."""
    result = runner.invoke(cli, ["obs-all", ragged_path])
    assert result.exit_code == 0, result.output
    assert _lines(result) == ["a\tb", "x\t1"]


def test_export_short_field(runner, ragged_path):
    """CSV export truncates to the shortest field instead of failing."""
    result = runner.invoke(cli, ["export", ragged_path])
    assert result.exit_code == 0, result.output
    rows = list(csv.reader(io.StringIO(result.output)))
    assert rows == [["a", "b"], ["x", "1"]]


def test_unsupported_encoding_reported(runner, make_h5ad):
    """Decoding errors are reported as 'error: ...' with exit status 1."""
    path = make_h5ad(
        [
            ("name", "strings", ["a"]),
            ("blob", "raw", ("mystery-type", ["?"])),
        ]
    )
    result = runner.invoke(cli, ["obs-head", path])
    assert result.exit_code == 1
    assert "error: Unsupported encoding-type 'mystery-type' for field 'blob'" in result.output


def test_missing_group_reported(runner, make_h5ad):
    """A file without a var table fails cleanly."""
    path = make_h5ad([("name", "strings", ["a"])])
    result = runner.invoke(cli, ["var-head", path])
    assert result.exit_code == 1
    assert "error: Group not found: 'var'" in result.output


def test_unreadable_file(runner, tmp_path):
    """Files that are not HDF5 are reported with their path."""
    bogus = tmp_path / "bogus.h5ad"
    bogus.write_text("not hdf5")
    result = runner.invoke(cli, ["shape", str(bogus)])
    assert result.exit_code != 0
    assert "Failed to open file" in result.output
