"""Integration tests for the sheetlayout CLI.

These tests drive every command through typer's CliRunner against a
snapshot file written to a temporary directory, checking both the text
and JSON outputs and the exit codes.
"""

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from sheetlayout.cli.main import app

pytestmark = pytest.mark.integration


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_data: dict[str, Any]) -> Path:
    path = tmp_path / "sheet.json"
    path.write_text(json.dumps(snapshot_data))
    return path


@pytest.fixture
def clean_snapshot_file(tmp_path: Path) -> Path:
    """A snapshot with a framed canvas and nothing to warn about."""
    path = tmp_path / "clean.json"
    path.write_text(
        json.dumps(
            {
                "version": "1.0",
                "canvases": [
                    {"id": "S1", "frame": {"min_x": 0, "min_y": 0, "max_x": 3, "max_y": 2}}
                ],
                "contents": [{"id": "d1", "crop": [0.5, 0.4]}],
            }
        )
    )
    return path


class TestValidateCommand:
    """Tests for the validate command."""

    def test_clean_snapshot(self, runner: CliRunner, clean_snapshot_file: Path) -> None:
        result = runner.invoke(app, ["validate", str(clean_snapshot_file)])

        assert result.exit_code == 0
        assert "Validation passed. Snapshot is valid." in result.output

    def test_snapshot_with_warnings(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["validate", str(snapshot_file)])

        assert result.exit_code == 2
        assert "Warnings:" in result.output
        assert "Validation passed with 3 warning(s)" in result.output

    def test_file_not_found(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output
        assert "Validation failed" in result.output

    def test_invalid_json(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output

    def test_schema_error(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"version": "1.0", "canvases": [{"id": "A", "colour": "red"}]}))
        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Errors:" in result.output

    def test_unknown_fail_point_content(
        self, runner: CliRunner, tmp_path: Path, snapshot_data: dict[str, Any]
    ) -> None:
        snapshot_data["fail_points"] = [{"x": 1.0, "y": 1.0, "content": "ghost"}]
        path = tmp_path / "sheet.json"
        path.write_text(json.dumps(snapshot_data))
        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "fail_points[0].content" in result.output


class TestAreaCommand:
    """Tests for the area command."""

    def test_text_output(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["area", str(snapshot_file)])

        assert result.exit_code == 0
        assert "PRINTABLE AREA: A101" in result.output
        assert "Source: frame" in result.output

    def test_json_output(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app, ["area", str(snapshot_file), "--canvas", "A102", "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["source"] == "guide"

    def test_margin_option(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["area", str(snapshot_file), "-m", "0", "-f", "json"])

        data = json.loads(result.output)
        assert data["bounds"] == {"min_x": 0.0, "min_y": 0.0, "max_x": 3.0, "max_y": 2.0}

    def test_unknown_canvas(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["area", str(snapshot_file), "--canvas", "Z9"])

        assert result.exit_code == 1
        assert "Error: Canvas not found: Z9" in result.output

    def test_unknown_format(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["area", str(snapshot_file), "--format", "xml"])

        assert result.exit_code == 1
        assert "Unknown format" in result.output

    def test_missing_snapshot(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["area", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert result.output.startswith("Error:")


class TestZonesCommand:
    """Tests for the zones command."""

    def test_keypad_zones(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["zones", str(snapshot_file)])

        assert result.exit_code == 0
        assert "5-MC" in result.output
        assert "OCCUPANCY" in result.output

    def test_json_occupancy(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["zones", str(snapshot_file), "--format", "json"])

        data = json.loads(result.output)
        assert len(data["zones"]) == 9
        assert data["occupancy"] == {"V1": ["4-ML", "7-TL"], "N1": ["3-BR"]}

    def test_custom_grid(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app, ["zones", str(snapshot_file), "--rows", "2", "--cols", "2", "-f", "json"]
        )

        names = [z["name"] for z in json.loads(result.output)["zones"]]
        assert names == ["r0c0", "r0c1", "r1c0", "r1c1"]

    def test_invalid_grid(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["zones", str(snapshot_file), "--rows", "0"])
        assert result.exit_code == 1


class TestPlanCommand:
    """Tests for the plan command."""

    def test_auto_plan(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["plan", str(snapshot_file), "--items", "d1,d2,d3"])

        assert result.exit_code == 0
        assert "LAYOUT PLAN: row-3" in result.output

    def test_diagram(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app, ["plan", str(snapshot_file), "-i", "d1,d2,d3,drifty", "--strategy", "grid-2x2", "--diagram"]
        )

        assert result.exit_code == 0
        assert "LAYOUT DIAGRAM" in result.output

    def test_columns_override_json(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app, ["plan", str(snapshot_file), "-i", "d1,d2,d3", "--columns", "2", "-f", "json"]
        )

        data = json.loads(result.output)
        assert data["strategy"] == "custom-2x2"
        assert data["columns"] == 2

    def test_spacing_preset(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app, ["plan", str(snapshot_file), "-i", "d1,d2", "--spacing", "spacious", "-f", "json"]
        )
        assert json.loads(result.output)["margin"] == 0.125

    def test_unknown_content(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["plan", str(snapshot_file), "-i", "d1,ghost"])

        assert result.exit_code == 1
        assert "Content not found: ghost" in result.output

    def test_reject_overflow(self, runner: CliRunner, snapshot_file: Path, tmp_path: Path) -> None:
        settings_file = tmp_path / "layout.json"
        settings_file.write_text(json.dumps({"margin_between": 1.0}))
        args = ["plan", str(snapshot_file), "-i", "d1,d2,d3", "-s", str(settings_file), "--strategy", "row"]

        place_all = runner.invoke(app, args)
        rejected = runner.invoke(app, [*args, "--overflow", "reject"])

        assert place_all.exit_code == 0
        assert "WARNING [cells-collapsed]" in place_all.output
        assert rejected.exit_code == 1
        assert "Error: Items do not fit a 3x1 grid" in rejected.output


class TestFindSpaceCommand:
    """Tests for the find-space command."""

    def test_candidates(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app, ["find-space", str(snapshot_file), "-w", "0.5", "-h", "0.3", "--max", "5"]
        )

        assert result.exit_code == 0
        assert "EMPTY SPACE (5 candidates)" in result.output

    def test_json_notes_preset(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app,
            ["find-space", str(snapshot_file), "-w", "0.3", "-h", "0.2", "--preset", "notes", "-f", "json"],
        )

        candidates = json.loads(result.output)["candidates"]
        assert candidates
        assert all(c["width"] == 0.3 for c in candidates)

    def test_nothing_fits(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["find-space", str(snapshot_file), "-w", "5", "-h", "5"])

        assert result.exit_code == 0
        assert "No empty space found." in result.output

    def test_invalid_size(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["find-space", str(snapshot_file), "-w", "0", "-h", "0.2"])

        assert result.exit_code == 1
        assert "required width must be positive" in result.output

    def test_zero_max_rejected(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app, ["find-space", str(snapshot_file), "-w", "0.2", "-h", "0.2", "--max", "0"]
        )

        assert result.exit_code == 1
        assert "max_candidates must be at least 1" in result.output


class TestCheckOverlapCommand:
    """Tests for the check-overlap command."""

    def test_overlap(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["check-overlap", str(snapshot_file), "--rect", "0.5,1.0,1.0,1.4"])

        assert result.exit_code == 0
        assert "Overlaps 1 region(s): V1" in result.output

    def test_buffer_json(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app,
            ["check-overlap", str(snapshot_file), "-r", "0.81,1.3,1.0,1.5", "-b", "0", "-f", "json"],
        )

        data = json.loads(result.output)
        assert data["has_overlap"] is False
        assert data["buffer"] == 0.0

    @pytest.mark.parametrize("rect", ["1,2,3", "a,b,c,d", "1,1,0.5,2"])
    def test_invalid_rect(self, runner: CliRunner, snapshot_file: Path, rect: str) -> None:
        result = runner.invoke(app, ["check-overlap", str(snapshot_file), "--rect", rect])

        assert result.exit_code == 1
        assert "Invalid rectangle" in result.output


class TestPlaceCommand:
    """Tests for the place command."""

    def test_batch(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["place", str(snapshot_file), "--items", "d1,d2,d3"])

        assert result.exit_code == 0
        assert "PLACED 3 of 3" in result.output

    def test_snapshot_file_unchanged(self, runner: CliRunner, snapshot_file: Path) -> None:
        before = snapshot_file.read_text()
        runner.invoke(app, ["place", str(snapshot_file), "--items", "d1"])
        assert snapshot_file.read_text() == before

    def test_batch_json_with_rejection(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["place", str(snapshot_file), "-i", "d1,placed1", "-f", "json"])

        data = json.loads(result.output)
        assert data["success"] is True
        assert [r["reason"] for r in data["rejected"]] == ["already-placed"]

    def test_nothing_placed_exits_nonzero(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["place", str(snapshot_file), "-i", "sched"])
        assert result.exit_code == 1

    def test_reject_overflow(self, runner: CliRunner, snapshot_file: Path, tmp_path: Path) -> None:
        settings_file = tmp_path / "layout.json"
        settings_file.write_text(json.dumps({"margin_between": 1.0}))
        result = runner.invoke(
            app,
            [
                "place",
                str(snapshot_file),
                "-i",
                "d1,d2,d3",
                "--settings",
                str(settings_file),
                "--strategy",
                "row",
                "--overflow",
                "reject",
            ],
        )

        assert result.exit_code == 1
        assert "Error: Items do not fit a 3x1 grid" in result.output

    def test_invalid_settings_file(self, runner: CliRunner, snapshot_file: Path, tmp_path: Path) -> None:
        settings_file = tmp_path / "layout.json"
        settings_file.write_text(json.dumps({"margin_between": -1}))
        result = runner.invoke(
            app, ["place", str(snapshot_file), "-i", "d1", "--settings", str(settings_file)]
        )

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_zone_preview(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app, ["place", str(snapshot_file), "-i", "d1", "--zone", "7", "--validate-only"]
        )

        assert result.exit_code == 0
        assert "ZONE 7-TL (Top-Left)" in result.output
        assert "Overlaps: V1" in result.output
        assert "Placed as" not in result.output
        assert "Fits sheet: yes" in result.output

    def test_zone_preview_json_overflow(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app,
            ["place", str(snapshot_file), "-i", "d1", "-z", "9", "--validate-only", "-f", "json"],
        )

        data = json.loads(result.output)
        assert data["fits_printable"] is True
        assert data["overflow"] == {"left": 0.0, "right": 0.0, "bottom": 0.0, "top": 0.0}

    def test_batch_conflict_reported(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app,
            ["place", str(snapshot_file), "-i", "d1,d2,d3,drifty", "--strategy", "grid-2x2"],
        )

        assert result.exit_code == 0
        assert "PLACED 4 of 4" in result.output
        assert "CONFLICT: d1 overlaps existing content V1" in result.output

    def test_zone_commit_json(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(
            app, ["place", str(snapshot_file), "-i", "d1", "-z", "center", "-f", "json"]
        )

        data = json.loads(result.output)
        assert data["zone"]["name"] == "5-MC"
        assert data["outcome"]["status"] == "placed"

    def test_zone_rejected_exits_nonzero(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["place", str(snapshot_file), "-i", "placed1", "-z", "5"])

        assert result.exit_code == 1
        assert "Rejected [already-placed]" in result.output

    def test_zone_requires_single_item(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["place", str(snapshot_file), "-i", "d1,d2", "-z", "5"])

        assert result.exit_code == 1
        assert "exactly one item" in result.output


class TestAuditCommand:
    """Tests for the audit command."""

    @pytest.fixture
    def crowded_snapshot_file(self, tmp_path: Path, snapshot_data: dict[str, Any]) -> Path:
        snapshot_data["canvases"][0]["occupied"].extend(
            [
                {"owner": "V2", "rect": {"min_x": 0.6, "min_y": 1.5, "max_x": 1.0, "max_y": 1.9}},
                {"owner": "V3", "rect": {"min_x": 2.9, "min_y": 1.0, "max_x": 3.2, "max_y": 1.3}},
            ]
        )
        path = tmp_path / "crowded.json"
        path.write_text(json.dumps(snapshot_data))
        return path

    def test_clean_canvas(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["audit", str(snapshot_file)])

        assert result.exit_code == 0
        assert "LAYOUT AUDIT: A101" in result.output
        assert "No layout issues found." in result.output

    def test_issues_exit_nonzero(self, runner: CliRunner, crowded_snapshot_file: Path) -> None:
        result = runner.invoke(app, ["audit", str(crowded_snapshot_file)])

        assert result.exit_code == 1
        assert "OVERLAP      V1 and V2" in result.output
        assert "OFF SHEET    V3" in result.output

    def test_json_output(self, runner: CliRunner, crowded_snapshot_file: Path) -> None:
        result = runner.invoke(app, ["audit", str(crowded_snapshot_file), "-f", "json"])

        data = json.loads(result.output)
        assert data["has_overlaps"] is True
        assert data["has_off_sheet"] is True
        assert data["off_sheet"] == ["V3"]
        assert data["overlaps"][0]["area"] == pytest.approx(0.04)

    def test_unknown_canvas(self, runner: CliRunner, snapshot_file: Path) -> None:
        result = runner.invoke(app, ["audit", str(snapshot_file), "--canvas", "Z9"])
        assert result.exit_code == 1
