"""Tests for the inspovid CLI."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from inspovid.exceptions import AllProvidersExhaustedError, ProviderNotConfiguredError
from inspovid.models.metadata import VideoMetadata, VideoStats


@pytest.fixture(autouse=True)
def no_config_files(monkeypatch):
    """Keep the developer's config files and .env out of CLI runs."""
    monkeypatch.setattr("inspovid.config.loader._find_project_config", lambda: None)
    monkeypatch.setattr(
        "inspovid.config.loader._get_user_config_path",
        lambda: Path("/nonexistent/config.yaml"),
    )
    monkeypatch.setattr("inspovid.cli.load_dotenv", lambda *args, **kwargs: False)


class TestValidateConfigCommand:
    """Tests for inspovid validate-config."""

    def test_no_config_file_exits_zero(self, capsys):
        """Test exits 0 when no config file is found."""
        from inspovid.cli import main

        with pytest.raises(SystemExit) as exc_info:
            main(["validate-config", "--skip-availability"])

        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "No config file found" in captured.out
        assert "Config is valid" in captured.out

    def test_valid_config_exits_zero(self, tmp_path, capsys):
        """Test exits 0 with a valid config."""
        from inspovid.cli import main

        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "providers:\n"
            "  rapidapi:\n"
            "    api_key: test\n"
            "  fallbacks:\n"
            "    tiktok: [tiktok-page]\n"
        )

        with (
            patch("inspovid.config.loader._find_project_config", return_value=config_file),
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["validate-config", "--skip-availability"])

        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert f"Config file: {config_file}" in captured.out
        assert "Config is valid." in captured.out

    def test_invalid_config_exits_one(self, tmp_path, capsys):
        """Test exits 1 with an unknown provider in a chain."""
        from inspovid.cli import main

        config_file = tmp_path / "config.yaml"
        config_file.write_text("providers:\n  fallbacks:\n    tiktok: [carrier-pigeon]\n")

        with (
            patch("inspovid.config.loader._find_project_config", return_value=config_file),
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["validate-config", "--skip-availability"])

        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "carrier-pigeon" in captured.out
        assert "Config is invalid" in captured.out

    def test_availability_listing(self, capsys):
        """Test provider availability is listed by default."""
        from inspovid.cli import main

        with pytest.raises(SystemExit):
            main(["validate-config"])

        captured = capsys.readouterr()
        assert "+ tiktok-page: available" in captured.out
        assert "- youtube-data: not configured" in captured.out


class TestResolveCommand:
    """Tests for inspovid resolve."""

    def _run(self, argv, resolver):
        from inspovid.cli import main

        with patch("inspovid.providers.resolver.MetadataResolver", return_value=resolver):
            main(argv)

    def test_human_output(self, capsys):
        resolver = MagicMock()
        resolver.resolve_url.return_value = VideoMetadata(
            title="Clip",
            author="@dancer",
            hashtags=["fyp"],
            duration=45,
            is_short=True,
            stats=VideoStats.from_counts(views=1500, likes=2, comments=0),
            source="tiktok-page",
        )
        self._run(["resolve", "https://www.tiktok.com/@d/video/1"], resolver)

        out = capsys.readouterr().out
        assert "Title: Clip" in out
        assert "1.5K views" in out
        assert "Duration: 45s (Short)" in out
        assert "#fyp" in out
        assert "Source: tiktok-page" in out

    def test_json_output(self, capsys):
        resolver = MagicMock()
        resolver.resolve_url.return_value = VideoMetadata(title="Clip", published_at="2024")
        self._run(["resolve", "https://youtu.be/dQw4w9WgXcQ", "--json"], resolver)

        data = json.loads(capsys.readouterr().out)
        assert data == {"title": "Clip", "hashtags": [], "publishedAt": "2024"}

    def test_error_exits_one(self, capsys):
        resolver = MagicMock()
        resolver.resolve_url.side_effect = AllProvidersExhaustedError(
            "youtube", [ProviderNotConfiguredError("YouTube API key not configured")]
        )
        with pytest.raises(SystemExit) as exc_info:
            self._run(["resolve", "https://youtu.be/dQw4w9WgXcQ"], resolver)

        assert exc_info.value.code == 1
        assert "YouTube API key not configured" in capsys.readouterr().err


class TestServeCommand:
    """Tests for inspovid serve."""

    def test_runs_uvicorn(self):
        from inspovid.cli import main

        with patch("uvicorn.run") as run:
            main(["serve", "--host", "0.0.0.0", "--port", "9000"])

        run.assert_called_once()
        assert run.call_args.kwargs == {"host": "0.0.0.0", "port": 9000}


class TestNoCommand:
    def test_prints_help(self, capsys):
        from inspovid.cli import main

        main([])
        assert "usage:" in capsys.readouterr().out
