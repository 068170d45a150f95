"""Unit tests for the JSON and text formatters."""

import json

import pytest

from sheetlayout.application.services import SheetLayoutService
from sheetlayout.domain.value_objects import (
    EmptySpaceCandidate,
    LayoutAudit,
    Rect,
    RegionOverlap,
)
from sheetlayout.infrastructure import JsonFormatter, TextFormatter


@pytest.fixture
def json_formatter() -> JsonFormatter:
    return JsonFormatter()


@pytest.fixture
def text_formatter() -> TextFormatter:
    return TextFormatter()


class TestJsonFormatter:
    """Tests for JsonFormatter dictionaries."""

    def test_area(self, service: SheetLayoutService, json_formatter: JsonFormatter) -> None:
        data = json_formatter.area_to_dict(service.resolve_printable_area("A101", 0.0))

        assert data["source"] == "frame"
        assert data["bounds"] == {"min_x": 0.0, "min_y": 0.0, "max_x": 3.0, "max_y": 2.0}
        assert data["center"] == {"x": 1.5, "y": 1.0}
        assert data["applied_margin"] == 0.0

    def test_zone(self, service: SheetLayoutService, json_formatter: JsonFormatter) -> None:
        zone = service.zones("A101", margin_inches=0.0)[4]
        data = json_formatter.zone_to_dict(zone)

        assert data["name"] == "5-MC"
        assert data["description"] == "Middle-Center"
        assert (data["row"], data["col"]) == (1, 1)
        assert data["center"] == {"x": 1.5, "y": 1.0}

    def test_plan(self, service: SheetLayoutService, json_formatter: JsonFormatter) -> None:
        items = service.estimate_footprints(["d1", "d2", "d3"])
        plan = service.plan_layout(items, Rect(0.0, 0.0, 3.0, 2.0))
        data = json_formatter.plan_to_dict(plan)

        assert data["strategy"] == "row-3"
        assert data["requested_strategy"] == "auto"
        assert data["start_corner"] == "top-left"
        assert [a["item_id"] for a in data["assignments"]] == ["d1", "d2", "d3"]
        assert data["warnings"] == []
        json.dumps(data)

    def test_plan_warnings(self, service: SheetLayoutService, json_formatter: JsonFormatter) -> None:
        items = service.estimate_footprints(["d1"])
        plan = service.plan_layout(items, Rect(0.0, 0.0, 3.0, 2.0), strategy="spiral")
        codes = [w["code"] for w in json_formatter.plan_to_dict(plan)["warnings"]]
        assert codes == ["unknown-strategy"]

    def test_candidate(self, json_formatter: JsonFormatter) -> None:
        data = json_formatter.candidate_to_dict(EmptySpaceCandidate(Rect(1.0, 0.5, 1.5, 0.8)))
        assert data == {
            "x": 1.0,
            "y": 0.5,
            "width": 0.5,
            "height": 0.3,
            "center": {"x": 1.25, "y": 0.65},
        }

    def test_overlap(self, service: SheetLayoutService, json_formatter: JsonFormatter) -> None:
        report = service.check_overlap("A101", Rect(0.5, 1.0, 1.0, 1.4))
        data = json_formatter.overlap_to_dict(report)

        assert data["has_overlap"] is True
        assert data["overlapping_ids"] == ["V1"]
        assert data["recommendation"] == "Choose a different location"

    def test_batch(self, service: SheetLayoutService, json_formatter: JsonFormatter) -> None:
        output = service.place_items("A101", ["d1", "sched"])
        data = json_formatter.batch_to_dict(output)

        assert data["success"] is True
        assert data["placed"][0]["status"] == "placed"
        assert data["placed"][0]["placement_id"] == "P1"
        assert data["rejected"] == [
            {
                "item_id": "sched",
                "status": "rejected",
                "reason": "incompatible-kind",
                "message": "sched cannot be placed on a canvas",
                "attempts": 0,
            }
        ]
        json.dumps(data)

    def test_batch_without_plan(self, service: SheetLayoutService, json_formatter: JsonFormatter) -> None:
        data = json_formatter.batch_to_dict(service.place_items("A101", ["placed1"]))
        assert data["plan"] is None
        assert data["success"] is False

    def test_zone_placement_preview(
        self, service: SheetLayoutService, json_formatter: JsonFormatter
    ) -> None:
        output = service.place_in_zone("A101", "d1", "7", validate_only=True)
        data = json_formatter.zone_placement_to_dict(output)

        assert data["validated_only"] is True
        assert data["outcome"] is None
        assert data["overlapping_ids"] == ["V1"]
        assert data["footprint"] == {"width": 0.5, "height": 0.4}
        assert data["fits_printable"] is True
        assert data["fits_sheet"] is True
        assert data["overflow"] == {"left": 0.0, "right": 0.0, "bottom": 0.0, "top": 0.0}

    def test_batch_conflicts(self, service: SheetLayoutService, json_formatter: JsonFormatter) -> None:
        output = service.place_items("A101", ["d1", "d2", "d3", "drifty"], strategy="grid-2x2")
        data = json_formatter.batch_to_dict(output)

        assert [c["item_id"] for c in data["conflicts"]] == ["d1"]
        assert data["conflicts"][0]["overlapping_ids"] == ["V1"]
        assert set(data["conflicts"][0]["alternative"]) == {"min_x", "min_y", "max_x", "max_y"}
        json.dumps(data)

    def test_audit(self, service: SheetLayoutService, json_formatter: JsonFormatter) -> None:
        data = json_formatter.audit_to_dict(service.analyze_layout("A101", margin_inches=0.0))

        assert data["sheet"] == {"min_x": 0.0, "min_y": 0.0, "max_x": 3.0, "max_y": 2.0}
        assert data["printable"] == data["sheet"]
        assert data["region_count"] == 2
        assert data["issue_count"] == 0
        assert data["overlaps"] == []
        assert data["has_overlaps"] is False
        assert data["has_off_sheet"] is False

    def test_dumps_is_indented(self, json_formatter: JsonFormatter) -> None:
        assert json_formatter.dumps({"a": 1}) == '{\n  "a": 1\n}'


class TestTextFormatter:
    """Tests for TextFormatter reports."""

    def test_area(self, service: SheetLayoutService, text_formatter: TextFormatter) -> None:
        text = text_formatter.format_area("A101", service.resolve_printable_area("A101", 0.0))

        assert text.startswith("PRINTABLE AREA: A101")
        assert "Source: frame" in text
        assert "Size:   3.000 x 2.000" in text

    def test_zones_with_occupancy(
        self, service: SheetLayoutService, text_formatter: TextFormatter
    ) -> None:
        text = text_formatter.format_zones(
            service.zones("A101"), service.zone_occupancy("A101")
        )
        assert "9-TR" in text
        assert "OCCUPANCY" in text
        assert "4-ML, 7-TL" in text

    def test_zones_without_occupancy(
        self, service: SheetLayoutService, text_formatter: TextFormatter
    ) -> None:
        assert "OCCUPANCY" not in text_formatter.format_zones(service.zones("A103"), {})

    def test_plan_and_diagram(self, service: SheetLayoutService, text_formatter: TextFormatter) -> None:
        items = service.estimate_footprints(["d1", "d2", "d3"])
        plan = service.plan_layout(items, Rect(0.0, 0.0, 3.0, 2.0))

        text = text_formatter.format_plan(plan)
        assert text.startswith("LAYOUT PLAN: row-3")
        assert "Grid:     3 columns x 1 rows" in text

        diagram = text_formatter.format_diagram(plan, width=60, height=20)
        lines = diagram.splitlines()
        assert lines[0] == "LAYOUT DIAGRAM"
        assert len(lines) == 3 + 20
        assert all(len(line) == 60 for line in lines[3:])
        assert "1" in diagram and "3" in diagram

    def test_no_candidates(self, text_formatter: TextFormatter) -> None:
        assert text_formatter.format_candidates([]) == "No empty space found."

    def test_candidates(self, service: SheetLayoutService, text_formatter: TextFormatter) -> None:
        candidates = service.find_empty_space("A101", 0.5, 0.3, max_candidates=2)
        text = text_formatter.format_candidates(candidates)
        assert text.startswith("EMPTY SPACE (2 candidates)")

    def test_overlap(self, service: SheetLayoutService, text_formatter: TextFormatter) -> None:
        hit = text_formatter.format_overlap(service.check_overlap("A101", Rect(0.5, 1.0, 1.0, 1.4)))
        clear = text_formatter.format_overlap(service.check_overlap("A101", Rect(1.2, 0.8, 1.6, 1.1)))

        assert hit == "Overlaps 1 region(s): V1. Choose a different location."
        assert clear.startswith("No overlap (buffer 0.02)")

    def test_batch(self, service: SheetLayoutService, text_formatter: TextFormatter) -> None:
        text = text_formatter.format_batch(service.place_items("A101", ["d1", "d3", "sched"]))

        assert "PLACED 2 of 3" in text
        assert "REJECTED [incompatible-kind]" in text

    def test_batch_reports_correction_warning(
        self, service: SheetLayoutService, text_formatter: TextFormatter
    ) -> None:
        text = text_formatter.format_batch(service.place_items("A101", ["pinned"]))
        assert "warning: Position correction failed" in text

    def test_batch_conflict(self, service: SheetLayoutService, text_formatter: TextFormatter) -> None:
        output = service.place_items("A101", ["d1", "d2", "d3", "drifty"], strategy="grid-2x2")
        text = text_formatter.format_batch(output)

        assert "CONFLICT: d1 overlaps existing content V1" in text
        assert "clear spot at" in text

    def test_zone_placement(self, service: SheetLayoutService, text_formatter: TextFormatter) -> None:
        text = text_formatter.format_zone_placement(service.place_in_zone("A101", "d1", "5"))

        assert text.startswith("ZONE 5-MC (Middle-Center)")
        assert "Fits zone: yes" in text
        assert "Fits printable area: yes" in text
        assert "Fits sheet: yes" in text
        assert "Sheet overflow" not in text
        assert "Placed as P1" in text

    def test_clean_audit(self, service: SheetLayoutService, text_formatter: TextFormatter) -> None:
        text = text_formatter.format_audit(service.analyze_layout("A101"))

        assert text.startswith("LAYOUT AUDIT: A101")
        assert "Regions: 2" in text
        assert text.endswith("No layout issues found.")

    def test_audit_issues(self, text_formatter: TextFormatter) -> None:
        audit = LayoutAudit(
            canvas_id="A101",
            sheet=Rect(0.0, 0.0, 3.0, 2.0),
            printable=Rect(0.1, 0.1, 2.9, 1.9),
            region_count=4,
            overlaps=(RegionOverlap("V1", "V2", 0.04),),
            off_sheet=("V3",),
            outside_printable=("N2",),
        )
        text = text_formatter.format_audit(audit)

        assert "Issues:  3" in text
        assert "OVERLAP      V1 and V2 (area 0.0400)" in text
        assert "OFF SHEET    V3" in text
        assert "OUTSIDE AREA N2" in text
        assert "No layout issues found." not in text
