"""Tests for the crop-hints analysis boundary (parse + strict validation)."""

from __future__ import annotations

import copy
import json

import pytest

from magic_moment.crop.hints import decode_json_payload, parse_crop_hints
from magic_moment.errors import AnalysisError, ValidationError
from magic_moment.models.crop import CropHints
from tests.conftest import CENTERED_HINTS, PORTRAIT_HINTS, hints_json


def _mutated(**changes) -> dict:
    data = copy.deepcopy(PORTRAIT_HINTS)
    for path, value in changes.items():
        target = data
        keys = path.split("__")
        for key in keys[:-1]:
            target = target[int(key)] if key.isdigit() else target[key]
        target[keys[-1]] = value
    return data


class TestParse:
    def test_parses_camel_case_payload(self):
        hints = parse_crop_hints(hints_json())
        assert isinstance(hints, CropHints)
        assert hints.focal_point.x == pytest.approx(0.42)
        assert hints.primary_subject.type == "person"
        assert len(hints.regions) == 4
        assert hints.regions[0].type == "eyes"

    def test_accepts_decoded_dict(self):
        hints = parse_crop_hints(CENTERED_HINTS)
        assert hints.regions == ()

    def test_strips_markdown_fences(self):
        fenced = "```json\n" + hints_json() + "\n```"
        assert parse_crop_hints(fenced).focal_point.y == pytest.approx(0.31)

    def test_tolerates_surrounding_prose(self):
        text = "Here are the hints:\n" + hints_json(CENTERED_HINTS) + "\nHope that helps."
        assert parse_crop_hints(text).focal_point.x == 0.5

    def test_result_is_immutable(self):
        hints = parse_crop_hints(hints_json())
        with pytest.raises(Exception):
            hints.focal_point = None  # type: ignore[misc]

    def test_ranked_regions(self):
        hints = parse_crop_hints(hints_json())
        ranked = hints.ranked_regions()
        assert [r.label for r in ranked[:2]] == ["face", "eyes"]
        assert ranked[-1].label == "lake shore"

    def test_serializes_back_to_camel_case(self):
        hints = parse_crop_hints(hints_json())
        dumped = hints.model_dump(by_alias=True)
        assert set(dumped) == {"focalPoint", "primarySubject", "regions"}


class TestAnalysisErrors:
    @pytest.mark.parametrize("content", [None, "", "   ", b""])
    def test_empty_content(self, content):
        with pytest.raises(AnalysisError):
            parse_crop_hints(content)

    def test_unparsable_content(self):
        with pytest.raises(AnalysisError):
            parse_crop_hints("I could not analyze this image, sorry.")

    def test_truncated_json(self):
        with pytest.raises(AnalysisError):
            parse_crop_hints(hints_json()[:-20])

    def test_decode_json_payload_plain(self):
        assert decode_json_payload('{"a": 1}') == {"a": 1}


class TestValidationErrors:
    def test_missing_regions(self):
        data = copy.deepcopy(PORTRAIT_HINTS)
        del data["regions"]
        with pytest.raises(ValidationError) as exc_info:
            parse_crop_hints(json.dumps(data))
        assert "regions" in exc_info.value.message

    def test_focal_point_out_of_range_is_not_clamped(self):
        with pytest.raises(ValidationError):
            parse_crop_hints(_mutated(focalPoint__x=1.2))

    def test_negative_box(self):
        with pytest.raises(ValidationError):
            parse_crop_hints(_mutated(primarySubject__box__y=-0.01))

    def test_confidence_above_ten(self):
        with pytest.raises(ValidationError):
            parse_crop_hints(_mutated(primarySubject__confidence=11))

    def test_importance_out_of_range(self):
        with pytest.raises(ValidationError):
            parse_crop_hints(_mutated(regions__0__importance=10.5))

    def test_unknown_region_type(self):
        with pytest.raises(ValidationError):
            parse_crop_hints(_mutated(regions__1__type="animal"))

    def test_numeric_string_rejected(self):
        with pytest.raises(ValidationError):
            parse_crop_hints(_mutated(focalPoint__x="0.5"))

    def test_wrong_shape_label(self):
        with pytest.raises(ValidationError):
            parse_crop_hints(_mutated(regions__0__label=42))

    def test_too_many_regions(self):
        data = copy.deepcopy(PORTRAIT_HINTS)
        data["regions"] = [copy.deepcopy(PORTRAIT_HINTS["regions"][0]) for _ in range(11)]
        with pytest.raises(ValidationError):
            parse_crop_hints(data)

    def test_ten_regions_allowed(self):
        data = copy.deepcopy(PORTRAIT_HINTS)
        data["regions"] = [copy.deepcopy(PORTRAIT_HINTS["regions"][0]) for _ in range(10)]
        assert len(parse_crop_hints(data).regions) == 10

    def test_top_level_array_reply(self):
        with pytest.raises(ValidationError):
            parse_crop_hints(json.dumps([PORTRAIT_HINTS, CENTERED_HINTS]))

    def test_fenced_array_reply(self):
        with pytest.raises(ValidationError):
            parse_crop_hints("```json\n[" + hints_json() + "]\n```")

    def test_top_level_array(self):
        with pytest.raises(ValidationError):
            parse_crop_hints([1, 2, 3])  # type: ignore[arg-type]

    def test_errors_are_attached(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_crop_hints(_mutated(focalPoint__y=2))
        assert exc_info.value.errors
        assert exc_info.value.status_code == 422
