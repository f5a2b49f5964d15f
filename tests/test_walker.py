# tests/test_walker.py

from marc_import.epdata import PersonEntry
from marc_import.loader import Leader, parse_record
from marc_import.mapping import load_mapping_table
from marc_import.walker import RecordWalker, convert, interpret_leader

FIELD_008 = "210101s2001" + " " * 24 + "eng d"


def _convert(table, config, xml, finalize=True):
    return RecordWalker(table, config).convert(parse_record(xml), finalize=finalize)


def test_monograph_end_to_end(table, config, marc_xml):
    xml = marc_xml(
        datafields=[
            ("245", "1", "0", [("a", "Physical Chemistry")]),
            ("260", " ", " ", [("b", "Oxford University Press")]),
        ]
    )

    out = _convert(table, config, xml)

    assert out["type"] == "monograph"
    assert out["status"] == "published"
    assert out["title"] == "Physical Chemistry"
    assert out["publisher"] == "Oxford University Press"
    assert out["oa_status"] == "closed"
    assert out["copyright"] == ["offen"]
    assert out.suggestions == []


def test_full_monograph_record(table, config, marc_xml):
    xml = marc_xml(
        controlfields=[("001", "991170525183205508"), ("008", FIELD_008)],
        datafields=[
            ("020", " ", " ", [("a", "978-0-19-870072-2")]),
            ("041", "0", " ", [("a", "eng"), ("a", "ger")]),
            ("100", "1", " ", [("a", "Atkins, Peter [VerfasserIn]"), ("4", "aut")]),
            ("245", "1", "0", [("a", "Physical chemistry :"), ("b", "thermodynamics /"), ("c", "Peter Atkins, Julio de Paula")]),
            ("260", " ", " ", [("a", "[Oxford]"), ("b", "[Oxford University Press],"), ("c", "2001")]),
            ("300", " ", " ", [("a", "xii, 310 S.")]),
            ("650", " ", "7", [("a", "Thermodynamik."), ("a", "thermodynamik")]),
            ("856", "4", "0", [("u", "https://d-nb.info/960/04")]),
            ("999", " ", " ", [("a", "local")]),
        ],
    )

    out = _convert(table, config, xml)

    assert out["source"] == "SLSP:alma991170525183205508"
    assert out["isbn"] == "978-0-19-870072-2"
    assert out["languages"] == ["en", "de"]
    assert out["date"] == "2001"
    assert out["title"] == "Physical chemistry : thermodynamics"
    assert out["place_of_pub"] == "Oxford"
    assert out["publisher"] == "Oxford University Press"
    assert out["pages"] == 322
    assert out["keywords"] == "Thermodynamik"
    assert out["creators"] == [PersonEntry("Atkins", "Peter"), PersonEntry("de Paula", "Julio")]
    assert [link["type"] for link in out["related_url"]] == ["catalog", "contents"]
    assert out.tmp_fields() == []


def test_date_conflict_across_fields(table, config, marc_xml):
    xml = marc_xml(
        controlfields=[("008", FIELD_008)],
        datafields=[("260", " ", " ", [("c", "2003")])],
    )

    out = _convert(table, config, xml)

    assert out["date"] == "2001"
    assert out.suggestions == [
        "Warning: Conflict between date in control field 008 (2001) and data field 260_c (2003)"
    ]


def test_unknown_field_class_is_logged_and_skipped(table, config, marc_xml, marc_logs):
    xml = marc_xml(
        datafields=[("245", "1", "0", [("a", "Still converted")])],
        extra="<localfield>x</localfield>",
    )

    out = _convert(table, config, xml)

    assert out["title"] == "Still converted"
    assert "Undefined MARC field class 'localfield'" in marc_logs.text


def test_filters_apply_before_handler(table, config, marc_xml):
    xml = marc_xml(
        datafields=[
            (
                "502",
                " ",
                " ",
                [("a", "Diss. med. Univ. Zürich, 2004. - Ref.: Hans Meier ; Korref.: Anna Dennis")],
            )
        ]
    )

    out = _convert(table, config, xml)

    assert out["type"] == "dissertation"
    assert out["thesis_subtype"] == "monographical"
    assert out["faculty"] == "Faculty of Medicine"
    assert out["examiners"] == [PersonEntry("Meier", "Hans"), PersonEntry("Dennis", "Anna")]


def test_sibling_lookup_is_scoped_to_the_current_field(table, config, marc_xml):
    xml = marc_xml(
        datafields=[
            ("024", "7", " ", [("a", "10.1000/xyz"), ("2", "doi")]),
            ("024", "7", " ", [("a", "12345678")]),
        ]
    )

    out = _convert(table, config, xml)

    assert out["doi"] == "10.1000/xyz"
    assert "pubmedid" not in out


def test_statement_editors_become_edited_work(table, config, marc_xml):
    xml = marc_xml(
        datafields=[
            ("245", "1", "0", [("a", "Festschrift"), ("c", "hrsg. von Anna Müller und Hans Meier")]),
            ("700", "1", " ", [("a", "Müller, Anna-Maria"), ("4", "edt")]),
        ]
    )

    raw = _convert(table, config, xml, finalize=False)
    assert raw["editorstmp"] == [PersonEntry("Müller", "Anna"), PersonEntry("Meier", "Hans")]

    out = _convert(table, config, xml)
    assert out["type"] == "edited_scientific_work"
    assert out["editors"] == [PersonEntry("Müller", "Anna-Maria"), PersonEntry("Meier", "Hans")]
    assert "creators" not in out
    assert out.tmp_fields() == []


def test_article_in_journal(table, config, marc_xml):
    xml = marc_xml(
        leader="00000naa a2200000 c 4500",
        datafields=[
            ("245", "1", "0", [("a", "Quantum dots")]),
            ("773", "0", " ", [("t", "Nature"), ("7", "nnas"), ("g", "Vol. 425, No. 6956 (2003), S. 45-67")]),
        ],
    )

    out = _convert(table, config, xml)

    assert out["type"] == "article"
    assert out["publication"] == "Nature"
    assert out["volume"] == "425"
    assert out["pagerange"] == "45-67"
    assert "series" not in out


def test_leader_rule_is_dispatched_when_configured(config, marc_xml):
    table = load_mapping_table(
        [{"field_class": "leader", "fieldname": "note", "handler": "direct"}],
        fields={"note": "scalar", "type": "scalar", "status": "scalar"},
    )
    record = parse_record(marc_xml())

    out = RecordWalker(table, config).walk(record)

    assert out["type"] == "monograph"
    assert out["note"] == "00000nam a2200000 c 4500"


def test_name_rule_accumulates_persons_in_its_field(config, marc_xml):
    table = load_mapping_table(
        [{"field_class": "datafield", "tag": "700", "subfield": "a", "fieldname": "creators", "handler": "marc2name"}],
        fields={"creators": "persons", "type": "scalar", "status": "scalar"},
    )
    xml = marc_xml(
        datafields=[
            ("700", "1", " ", [("a", "Müller, Anna."), ("0", "(orcid)0000-0002-1825-0097")]),
            ("700", "1", " ", [("a", "Müller, Anna-Maria")]),
            ("700", "1", " ", [("a", "Meier, Hans")]),
        ]
    )

    out = RecordWalker(table, config).walk(parse_record(xml))

    assert out["creators"] == [
        PersonEntry("Müller", "Anna", "0000-0002-1825-0097"),
        PersonEntry("Meier", "Hans"),
    ]


def test_leader_does_not_overwrite_existing_type(epdata, config):
    epdata.set("type", "dissertation")

    interpret_leader(Leader("00000nam a22000008c 4500"), epdata, config)

    assert epdata["type"] == "dissertation"
    assert epdata["status"] == "inpress"


def test_short_leader_sets_type_only(epdata, config):
    interpret_leader(Leader("00000nam"), epdata, config)

    assert epdata["type"] == "monograph"
    assert "status" not in epdata


def test_module_level_convert_uses_default_table(marc_xml):
    out = convert(parse_record(marc_xml(datafields=[("245", "1", "0", [("a", "Default")])])))

    assert out["title"] == "Default"
