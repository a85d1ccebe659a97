"""Unit tests for the eager, record-snapshot BackendVisibilityService."""

from custom_fields.application.services import BackendVisibilityService
from custom_fields.domain.entities import (
    CustomField,
    EntityRecord,
    FieldOption,
    FieldType,
    VisibilityPolicy,
)


def _fields() -> list[CustomField]:
    def make(code, visibility=None, **kwargs):
        return CustomField(
            entity_type="contact",
            code=code,
            name=code.title(),
            visibility=VisibilityPolicy.from_config(visibility),
            **kwargs,
        )

    return [
        make(
            "country",
            field_type=FieldType.SELECT,
            options=[FieldOption(id="1", name="US"), FieldOption(id="2", name="CA")],
        ),
        make(
            "state",
            {"mode": "if", "conditions": [{"field_code": "country", "operator": "equals", "value": "US"}]},
        ),
        make(
            "county",
            {"mode": "if", "conditions": [{"field_code": "state", "operator": "is_not_empty"}]},
        ),
        make("notes"),
    ]


def test_visible_fields_preserve_input_order():
    fields = _fields()
    record = EntityRecord(entity_type="contact", record_id="r1", values={"country": "1", "state": "TX"})

    visible = BackendVisibilityService().get_visible_fields(record, fields)
    assert [f.code for f in visible] == ["country", "state", "county", "notes"]


def test_hidden_parent_does_not_hide_dependents_by_default():
    fields = _fields()
    values = {"country": "2", "state": "TX"}

    assert BackendVisibilityService().get_hidden_field_codes(values, fields) == ["state"]
    assert BackendVisibilityService(cascade=True).get_hidden_field_codes(values, fields) == [
        "state",
        "county",
    ]


def test_default_pass_matches_each_policy_one_level_deep():
    fields = _fields()
    values = {"country": "2", "state": "TX"}

    visible = BackendVisibilityService().get_visible_fields(values, fields)
    snapshot = BackendVisibilityService().extract_field_values(values, fields)
    assert [f.code for f in visible] == [
        f.code for f in fields if f.visibility.evaluate(snapshot)
    ]


def test_snapshot_is_extracted_once_and_normalised():
    fields = _fields()
    reads: list[str] = []

    def getter(code):
        reads.append(code)
        return {"country": "1"}.get(code)

    service = BackendVisibilityService()
    snapshot = service.extract_field_values(getter, fields)
    assert snapshot == {"country": "US", "state": None, "county": None, "notes": None}

    reads.clear()
    service.get_visible_fields(getter, fields)
    assert sorted(reads) == ["country", "county", "notes", "state"]


def test_disabled_feature_shows_everything():
    fields = _fields()
    service = BackendVisibilityService(enabled=False)

    assert service.get_visible_fields({}, fields) == fields
    assert service.is_field_visible({}, fields[1], fields) is True
    assert service.filter_visible_fields(fields, {}) == fields


def test_is_field_visible_and_none_record():
    fields = _fields()
    service = BackendVisibilityService()

    assert service.is_field_visible(None, fields[0], fields) is True
    assert service.is_field_visible(None, fields[1], fields) is False
    assert service.is_field_visible({"country": "1"}, fields[1], fields) is True


def test_validate_visibility_consistency_report():
    fields = _fields()
    report = BackendVisibilityService().validate_visibility_consistency({"country": "1"}, fields)

    assert report["total_fields"] == 4
    assert report["visible_fields"] == 3
    assert report["hidden_fields"] == 1
    assert report["has_visibility_conditions"] == 2
    assert report["visible_field_codes"] == ["country", "state", "notes"]
    assert report["dependencies"] == {"country": ["state"], "state": ["county"]}


def test_consistency_report_reads_each_value_once():
    fields = _fields()
    reads: list[str] = []

    def getter(code):
        reads.append(code)
        return {"country": "1"}.get(code)

    BackendVisibilityService().validate_visibility_consistency(getter, fields)
    assert sorted(reads) == ["country", "county", "notes", "state"]
