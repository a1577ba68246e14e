from pathlib import Path
from unittest.mock import Mock, patch

from click.testing import CliRunner

from rename_receipts.cli import main


def test_cli_uses_default_directories() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(), patch("rename_receipts.cli.get_model", return_value=Mock()) as mock_get_model:
        result = runner.invoke(main, [])

        assert result.exit_code == 0, result.output
        assert Path("receipts").is_dir()
        assert Path("renamed-receipts").is_dir()
    mock_get_model.assert_called_once_with("gpt-4o-mini")
    assert "Processed 0 receipts" in result.output


def test_cli_options(tmp_path: Path) -> None:
    runner = CliRunner()
    with patch("rename_receipts.cli.get_model", return_value=Mock()) as mock_get_model:
        result = runner.invoke(
            main,
            ["--input-dir", str(tmp_path / "in"), "--output-dir", str(tmp_path / "out"), "--model", "gpt-4o"],
        )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "in").is_dir()
    assert (tmp_path / "out").is_dir()
    mock_get_model.assert_called_once_with("gpt-4o")


def test_cli_exits_with_error_when_directory_is_a_file() -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(), patch("rename_receipts.cli.get_model", return_value=Mock()):
        Path("renamed-receipts").write_text("not a directory")
        result = runner.invoke(main, [])

    assert result.exit_code == 1
    assert "Fatal error: renamed-receipts is not a directory" in result.output


def test_cli_exits_cleanly_when_most_receipts_fail() -> None:
    """Test that per-file failures are reported without failing the run."""
    model = Mock(model_id="fake-model")
    model.prompt.side_effect = ConnectionError("service unavailable")
    runner = CliRunner()
    with runner.isolated_filesystem(), patch("rename_receipts.cli.get_model", return_value=model):
        Path("receipts").mkdir()
        Path("receipts/notes.txt").write_text("not a receipt")
        Path("receipts/receipt.png").write_bytes(b"png bytes")
        result = runner.invoke(main, [])

    assert result.exit_code == 0, result.output
    assert model.prompt.call_count == 4
    assert "Processed 2 receipts: 0 successful, 2 failed" in result.output
    assert "More than half of the receipts failed to process." in result.output
