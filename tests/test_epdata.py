# tests/test_epdata.py

import pytest

from marc_import.core.exceptions import ConfigurationError
from marc_import.epdata import EPData, MergePolicy, PersonEntry, is_declared, load_field_policies


def test_list_policy_keeps_first_occurrence_order(epdata):
    for code in ["de", "en", "de", "fr", "en"]:
        epdata.store("languages", code)

    assert epdata["languages"] == ["de", "en", "fr"]


def test_append_policy_keeps_duplicates(epdata):
    grant = {"funder_name": "SNSF"}
    epdata.store("funding_reference", grant)
    epdata.store("funding_reference", grant)

    assert len(epdata["funding_reference"]) == 2


def test_scalar_policy_overwrites(epdata):
    epdata.store("title", "First")
    epdata.store("title", "Second")

    assert epdata["title"] == "Second"


def test_store_ignores_empty_values(epdata):
    epdata.store("title", None)
    epdata.store("note", "")
    epdata.store("languages", [])

    assert epdata.field_names() == []


def test_person_with_longer_given_name_is_same_person(epdata):
    epdata.store("creators", PersonEntry("Müller", "Anna"))
    epdata.store("creators", PersonEntry("Müller", "Anna-Maria"))

    assert epdata["creators"] == [PersonEntry("Müller", "Anna")]


def test_person_match_is_symmetric():
    short = PersonEntry("Müller", "A")
    full = PersonEntry("Müller", "Anna")

    assert short.matches(full)
    assert full.matches(short)


def test_persons_differing_given_names_are_kept(epdata):
    epdata.store("creators", PersonEntry("Müller", "Anna"))
    epdata.store("creators", PersonEntry("Müller", "Berta"))

    assert len(epdata["creators"]) == 2


def test_person_orcid_match(epdata):
    epdata.store("creators", PersonEntry("Meier", "Hans", "0000-0002-1825-0097"))
    epdata.store("creators", PersonEntry("Meyer", "H.", "0000-0002-1825-0097"))

    assert len(epdata["creators"]) == 1


def test_first_policy_reports_conflict_with_both_sources(epdata):
    epdata.store("date", "2001", "control field 008")
    epdata.store("date", "2003", "data field 260_c")

    assert epdata["date"] == "2001"
    assert epdata.suggestions == [
        "Warning: Conflict between date in control field 008 (2001) and data field 260_c (2003)"
    ]


def test_first_policy_same_value_is_silent(epdata):
    epdata.store("date", "2001", "control field 008")
    epdata.store("date", "2001", "data field 264_c")

    assert epdata.suggestions == []
    assert epdata.source_of("date") == "control field 008"


def test_set_first_normalizes_before_comparing(epdata):
    epdata.set_first("issn", "0028-0836", "data field 022_a", label="ISSN")
    stored = epdata.set_first(
        "issn",
        "00280836",
        "data field 490_x",
        label="ISSN",
        normalize=lambda v: v.replace("-", ""),
    )

    assert stored is False
    assert epdata.suggestions == []


def test_undeclared_tmp_field_merges_as_persons():
    record = EPData({})
    assert record.policy_for("reviewerstmp") is MergePolicy.PERSONS
    assert record.policy_for("anything") is MergePolicy.SCALAR


def test_to_dict_flattens_persons_and_suggestions(epdata):
    epdata.store("title", "Physical Chemistry")
    epdata.store("creators", PersonEntry("Atkins", "Peter"))
    epdata.add_suggestion("first")
    epdata.add_suggestion("second")

    out = epdata.to_dict()

    assert out["creators"] == [{"name": {"family": "Atkins", "given": "Peter"}, "orcid": None}]
    assert out["suggestions"] == "first\nsecond"


def test_load_field_policies_rejects_unknown_policy():
    with pytest.raises(ConfigurationError, match="unknown merge policy"):
        load_field_policies({"title": "sometimes"})


def test_load_field_policies_is_read_only():
    policies = load_field_policies({"title": "scalar"})

    assert policies["title"] is MergePolicy.SCALAR
    with pytest.raises(TypeError):
        policies["title"] = MergePolicy.LIST


def test_is_declared_accepts_tmp_lists(table):
    assert is_declared("title", table.policies)
    assert is_declared("reviewerstmp", table.policies)
    assert not is_declared("colour", table.policies)
