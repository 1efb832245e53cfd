"""
Integration tests for the frame pipeline CLI.
Tests command-line interface functionality and argument parsing.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typer.testing import CliRunner
from PIL import Image

from ..cli import app
from .. import __version__


class TestCLIIntegration:
    """Test CLI integration and command functionality."""

    def setup_method(self):
        """Set up test environment before each test."""
        self.runner = CliRunner()
        self.temp_dir = Path(tempfile.mkdtemp())
        self.original_cwd = os.getcwd()
        os.chdir(self.temp_dir)

        self.data_dir = self.temp_dir / "data"
        (self.data_dir / "items").mkdir(parents=True)
        (self.data_dir / "entities").mkdir(parents=True)

    def teardown_method(self):
        """Clean up test environment after each test."""
        os.chdir(self.original_cwd)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def create_test_data(self, torch_frames: int = 2):
        """Create a catalog with one item and one enemy."""
        Image.new('RGBA', (32, 32), (255, 128, 0, 255)).save(self.data_dir / "items" / "torch_1.png")
        Image.new('RGBA', (128, 64), (20, 20, 200, 255)).save(self.data_dir / "entities" / "bat.png")
        (self.data_dir / "necrodancer.xml").write_text(
            '<necrodancer>'
            f'<items><torch_1 imageFile="torch_1.png" numFrames="{torch_frames}"/></items>'
            '<enemies><bat type="1"><spritesheet numFrames="4">entities/bat.png</spritesheet></bat></enemies>'
            '</necrodancer>'
        )

    def test_cli_help(self):
        """Test that CLI help command works."""
        result = self.runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Sprite frame pipeline" in result.stdout

    def test_version(self):
        result = self.runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_run_into_directory(self):
        """Test a full run publishing into a local directory."""
        self.create_test_data()
        out_dir = self.temp_dir / "out"

        result = self.runner.invoke(app, ["run", str(self.data_dir), str(out_dir)])

        assert result.exit_code == 0, result.stdout
        assert "Published 48 variants" in result.stdout
        assert (out_dir / "items" / "torch_13l.png").exists()
        assert (out_dir / "enemies" / "bat17d.png").exists()

    def test_run_fails_on_bad_entity(self):
        self.create_test_data(torch_frames=0)
        out_dir = self.temp_dir / "out"

        result = self.runner.invoke(app, ["run", str(self.data_dir), str(out_dir)])

        assert result.exit_code == 1
        assert "Pipeline failed" in result.stdout
        assert not out_dir.exists() or not any(out_dir.rglob("*.png"))

    def test_run_keep_going(self):
        self.create_test_data(torch_frames=0)
        out_dir = self.temp_dir / "out"

        result = self.runner.invoke(app, ["run", str(self.data_dir), str(out_dir), "--keep-going"])

        assert result.exit_code == 1
        assert len(list(out_dir.rglob("*.png"))) == 32

    def test_run_missing_catalog(self):
        result = self.runner.invoke(app, ["run", str(self.temp_dir / "nowhere"), str(self.temp_dir / "out")])

        assert result.exit_code == 1

    def test_run_unsupported_config_format(self):
        self.create_test_data()
        config_path = self.temp_dir / "settings.yaml"
        config_path.write_text("store: {}")

        result = self.runner.invoke(app, ["run", str(self.data_dir), "out", "--config", str(config_path)])

        assert result.exit_code == 1
        assert "Error loading configuration" in result.stdout
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_run_malformed_config(self):
        self.create_test_data()
        config_path = self.temp_dir / "broken.toml"
        config_path.write_text("[store\nurl = ")

        result = self.runner.invoke(app, ["run", str(self.data_dir), "out", "--config", str(config_path)])

        assert result.exit_code == 1
        assert "Error loading configuration" in result.stdout
        assert not (self.temp_dir / "out").exists()

    def test_run_invalid_workers(self):
        self.create_test_data()

        result = self.runner.invoke(app, ["run", str(self.data_dir), "out", "--workers", "0"])

        assert result.exit_code == 1
        assert "max_publish_workers" in result.stdout

    def test_frames_command(self):
        """Test slicing a single sheet into an output directory."""
        sheet = self.temp_dir / "bat.png"
        Image.new('RGBA', (64, 32), (0, 200, 0, 255)).save(sheet)
        out_dir = self.temp_dir / "frames"

        result = self.runner.invoke(app, [
            "frames", str(sheet), "--frames", "2", "--category", "enemies",
            "--type", "3", "--output", str(out_dir)
        ])

        assert result.exit_code == 0, result.stdout
        files = sorted(path.name for path in (out_dir / "enemies").iterdir())
        assert len(files) == 16
        assert "bat30d.png" in files
        assert "bat33l.png" in files

    def test_frames_bad_category(self):
        result = self.runner.invoke(app, ["frames", "x.png", "--category", "bosses"])
        assert result.exit_code == 1

    def test_frames_unreadable_sheet(self):
        result = self.runner.invoke(app, ["frames", str(self.temp_dir / "missing.png")])
        assert result.exit_code == 1

    def test_catalog_command(self):
        self.create_test_data()

        result = self.runner.invoke(app, ["catalog", str(self.data_dir)])

        assert result.exit_code == 0
        assert "2 entities" in result.stdout

    def test_config_env_vars(self):
        result = self.runner.invoke(app, ["config", "--env-vars"])
        assert result.exit_code == 0
        assert "CRYPT_IMAGES_DATA_DIR" in result.stdout

    def test_config_validate_file(self):
        config_path = self.temp_dir / "bad.json"
        config_path.write_text('{"processing": {"compression_level": 42}}')

        result = self.runner.invoke(app, ["config", "--validate", "--config", str(config_path)])

        assert result.exit_code == 1
        assert "compression_level" in result.stdout

    def test_config_picks_up_default_file(self):
        (self.temp_dir / "crypt_images.json").write_text('{"store": {"cache_control": "max-age=1"}}')

        result = self.runner.invoke(app, ["config", "--show"])

        assert result.exit_code == 0
        assert "max-age=1" in result.stdout
