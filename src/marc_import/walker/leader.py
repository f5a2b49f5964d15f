from __future__ import annotations

from marc_import.epdata.record import EPData
from marc_import.loader.record import Leader

BIBLIOGRAPHIC_LEVEL = 7
ENCODING_LEVEL = 17


def interpret_leader(leader: Leader, epdata: EPData, config, source: str = "leader") -> None:
    """
    Leader position 7 (bibliographic level) gives the document type and
    position 17 (encoding level) the publication status. Neither overwrites
    a value that is already set.
    """
    doc_type = config.biblevel_type_map.get(leader.position(BIBLIOGRAPHIC_LEVEL))
    if doc_type and "type" not in epdata:
        epdata.set("type", doc_type, source)

    status = config.encoding_status_map.get(leader.position(ENCODING_LEVEL))
    if status and "status" not in epdata:
        epdata.set("status", status, source)
