# tests/test_reconciliation.py

import copy

from marc_import.epdata import PersonEntry
from marc_import.postprocess import finalize, merge_provisional_lists


def test_provisional_lists_merge_with_person_dedup(epdata):
    epdata.store("creators", PersonEntry("Müller", "Anna"))
    epdata.store("creatorstmp", PersonEntry("Müller", "Anna"))
    epdata.store("creatorstmp", PersonEntry("Meier", "Hans"))

    merge_provisional_lists(epdata)

    assert epdata["creators"] == [PersonEntry("Müller", "Anna"), PersonEntry("Meier", "Hans")]
    assert epdata.tmp_fields() == []


def test_provisional_list_without_canonical_list_is_promoted(epdata):
    epdata.store("examinerstmp", PersonEntry("Grote", "Gudela"))

    merge_provisional_lists(epdata)

    assert epdata["examiners"] == [PersonEntry("Grote", "Gudela")]
    assert "examinerstmp" not in epdata


def test_editors_only_record_becomes_edited_work(epdata, config):
    epdata.set("type", "monograph")
    epdata.set("creators", [])
    epdata.store("editors", PersonEntry("Müller", "Anna"))
    epdata.store("editors", PersonEntry("Meier", "Hans"))

    finalize(epdata, config)

    assert epdata["type"] == "edited_scientific_work"
    assert len(epdata["editors"]) == 2
    assert "creators" not in epdata.field_names()
    assert "creators" not in epdata.to_dict()


def test_edited_work_moves_creators_to_editors(epdata, config):
    epdata.set("type", "edited_scientific_work")
    epdata.store("creators", PersonEntry("Atkins", "Peter"))
    epdata.store("editors", PersonEntry("de Paula", "Julio"))

    finalize(epdata, config)

    assert epdata["editors"] == [PersonEntry("de Paula", "Julio"), PersonEntry("Atkins", "Peter")]
    assert "creators" not in epdata


def test_article_series_becomes_publication(epdata, config):
    epdata.set("type", "article")
    epdata.set("series", "Nature", "data field 490_a")

    finalize(epdata, config)

    assert epdata["publication"] == "Nature"
    assert epdata.source_of("publication") == "data field 490_a"
    assert "series" not in epdata


def test_thesis_subtype_default_only_when_unset(epdata, config):
    epdata.set("type", "dissertation")
    finalize(epdata, config)
    assert epdata["thesis_subtype"] == "monographical"

    epdata.set("thesis_subtype", "cumulative")
    finalize(epdata, config)
    assert epdata["thesis_subtype"] == "cumulative"


def test_habilitation_has_no_default_subtype(epdata, config):
    epdata.set("type", "habilitation")

    finalize(epdata, config)

    assert "thesis_subtype" not in epdata


def test_fixed_defaults(epdata, config):
    finalize(epdata, config)

    assert epdata["oa_status"] == "closed"
    assert epdata["copyright"] == ["offen"]


def test_finalize_is_idempotent(epdata, config):
    epdata.set("type", "article")
    epdata.set("series", "Nature")
    epdata.store("creators", PersonEntry("Müller", "Anna"))
    epdata.store("creatorstmp", PersonEntry("Müller", "Anna-Maria"))
    epdata.store("editorstmp", PersonEntry("Meier", "Hans"))
    epdata.add_suggestion("Warning: Typo in date: 3005")

    once = finalize(epdata, config)
    snapshot = copy.deepcopy(once.to_dict())
    twice = finalize(once, config)

    assert twice.to_dict() == snapshot
