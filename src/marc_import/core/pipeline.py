from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

from lxml import etree

from marc_import.core.context import ConversionContext
from marc_import.core.exceptions import ConversionError, MarcImportError
from marc_import.epdata.record import EPData
from marc_import.exporter import export_records_json
from marc_import.loader import CatalogRecord, iter_records, parse_document, parse_sru_response
from marc_import.mapping import build_mapping_table
from marc_import.walker import RecordWalker

SRU_RESPONSE = "searchRetrieveResponse"


def load_records(path: str | Path) -> Tuple[List[CatalogRecord], int, List[str]]:
    """
    Read a MARC XML file or a saved SRU response.

    Returns (records, total hits, diagnostics). For plain MARC XML the
    total is the number of records in the file.
    """
    root = parse_document(Path(path))

    if etree.QName(root).localname == SRU_RESPONSE:
        response = parse_sru_response(root)
        return response.records, response.total, response.diagnostics

    records = list(iter_records(root))
    return records, len(records), []


class Pipeline:
    """
    Orchestrates a conversion batch: load -> convert each record -> export.
    No conversion logic lives here.
    """

    def __init__(self, context: ConversionContext):
        self.ctx = context
        self.log = context.logger

    def run(self) -> List[EPData]:
        self.log.info("Pipeline starting")

        try:
            table = build_mapping_table(self.ctx.config)
            walker = RecordWalker(table, self.ctx.config)

            records, total, diagnostics = load_records(self.ctx.input_path)
            self.ctx.errors.extend(diagnostics)
            if self.ctx.first_only:
                records = records[:1]

            results = [walker.convert(record, finalize=self.ctx.finalize) for record in records]

            self.ctx.stats.update(
                {
                    "records": len(results),
                    "total": total,
                    "with_suggestions": sum(1 for r in results if r.suggestions),
                    "diagnostics": len(diagnostics),
                }
            )

            if self.ctx.output_path:
                export_records_json(results, self.ctx.output_path, total=total)

            self.log.info("Pipeline completed successfully (%d record(s))", len(results))

            return results

        except MarcImportError:
            self.log.exception("Pipeline execution failed")
            raise
        except Exception as exc:
            self.log.exception("Pipeline execution failed")
            raise ConversionError(str(exc)) from exc
