# tests/test_loader.py

from pathlib import Path

import pytest

from marc_import.core.exceptions import RecordParseError
from marc_import.loader import (
    ControlField,
    DataField,
    Leader,
    Subfield,
    UnknownField,
    iter_records,
    parse_record,
    parse_sru_response,
)

PLAIN_RECORD = """<?xml version="1.0" encoding="UTF-8"?>
<record>
  <leader>00000nab a2200000 c 4500</leader>
  <controlfield tag="001">991000000000005508</controlfield>
  <datafield tag="245" ind1="1" ind2="0">
    <subfield code="a">  Plain record  </subfield>
  </datafield>
</record>
"""

SRU_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<searchRetrieveResponse xmlns="http://www.loc.gov/zing/srw/">
  <version>1.2</version>
  <numberOfRecords>42</numberOfRecords>
  <records>
    <record>
      <recordSchema>marcxml</recordSchema>
      <recordPacking>xml</recordPacking>
      <recordData>
        <record xmlns="http://www.loc.gov/MARC21/slim">
          <leader>00000nam a2200000 c 4500</leader>
          <datafield tag="245" ind1="1" ind2="0"><subfield code="a">First hit</subfield></datafield>
        </record>
      </recordData>
      <recordPosition>1</recordPosition>
    </record>
    <record>
      <recordSchema>marcxml</recordSchema>
      <recordPacking>xml</recordPacking>
      <recordData>
        <record xmlns="http://www.loc.gov/MARC21/slim">
          <leader>00000naa a2200000 c 4500</leader>
          <datafield tag="245" ind1="1" ind2="0"><subfield code="a">Second hit</subfield></datafield>
        </record>
      </recordData>
      <recordPosition>2</recordPosition>
    </record>
  </records>
</searchRetrieveResponse>
"""

SRU_DIAGNOSTIC = """<?xml version="1.0" encoding="UTF-8"?>
<searchRetrieveResponse xmlns="http://www.loc.gov/zing/srw/">
  <version>1.2</version>
  <numberOfRecords>0</numberOfRecords>
  <diagnostics>
    <diagnostic xmlns="http://www.loc.gov/zing/srw/diagnostic/">
      <uri>info:srw/diagnostic/1/10</uri>
      <message>Query syntax error</message>
    </diagnostic>
  </diagnostics>
</searchRetrieveResponse>
"""


def test_namespaced_record_keeps_document_order(marc_xml):
    xml = marc_xml(
        controlfields=[("001", "991000000000005508")],
        datafields=[
            ("245", "1", "0", [("a", "Physical Chemistry"), ("c", "Peter Atkins")]),
            ("650", " ", "7", [("a", "Chemie"), ("a", "Physik")]),
        ],
    )

    record = parse_record(xml)
    fields = list(record)

    assert isinstance(fields[0], Leader)
    assert fields[0].position(7) == "m"
    assert fields[1] == ControlField(tag="001", value="991000000000005508")
    assert fields[2] == DataField(
        tag="245",
        ind1="1",
        ind2="0",
        subfields=(Subfield("a", "Physical Chemistry"), Subfield("c", "Peter Atkins")),
    )
    assert fields[3].values("a") == ["Chemie", "Physik"]


def test_plain_record_without_namespace():
    record = parse_record(PLAIN_RECORD)

    assert record.leader.value == "00000nab a2200000 c 4500"
    assert record.control_value("001") == "991000000000005508"
    assert record.datafields("245")[0].first("a") == "Plain record"


def test_leader_blanks_are_preserved(marc_xml):
    record = parse_record(marc_xml())

    assert record.leader.value == "00000nam a2200000 c 4500"
    assert record.leader.position(17) == " "
    assert record.leader.position(40) is None


def test_unknown_element_is_kept_as_unknown_field(marc_xml):
    record = parse_record(marc_xml(extra="<localfield>extra</localfield>"))

    assert record.fields[-1] == UnknownField(field_class="localfield", text="extra")


def test_collection_yields_all_records_and_parse_takes_first(marc_xml):
    first = marc_xml(datafields=[("245", "1", "0", [("a", "One")])])
    second = marc_xml(datafields=[("245", "1", "0", [("a", "Two")])])
    collection = f'<collection xmlns="http://www.loc.gov/MARC21/slim">{first}{second}</collection>'

    records = list(iter_records(collection))

    assert [r.datafields("245")[0].first("a") for r in records] == ["One", "Two"]
    assert parse_record(collection).datafields("245")[0].first("a") == "One"


def test_record_from_file(tmp_path: Path):
    path = tmp_path / "record.xml"
    path.write_text(PLAIN_RECORD, encoding="utf-8")

    assert parse_record(path).control_value("001") == "991000000000005508"


def test_malformed_xml_raises_parse_error():
    with pytest.raises(RecordParseError, match="not well-formed"):
        parse_record("<record><leader>")


def test_document_without_record_raises_parse_error():
    with pytest.raises(RecordParseError, match="No MARC21 record"):
        parse_record("<collection/>")


def test_sru_response_records_and_total():
    response = parse_sru_response(SRU_RESPONSE)

    assert response.ok
    assert response.total == 42
    assert [r.datafields("245")[0].first("a") for r in response.records] == ["First hit", "Second hit"]
    assert response.records[1].leader.position(7) == "a"


def test_sru_diagnostics_are_reported(marc_logs):
    response = parse_sru_response(SRU_DIAGNOSTIC)

    assert not response.ok
    assert response.diagnostics == ["Query syntax error"]
    assert response.records == []
    assert "Query syntax error" in marc_logs.text
