import logging
import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from marc_import.config import load_config  # noqa: E402
from marc_import.epdata import EPData  # noqa: E402
from marc_import.loader import DataField, Subfield  # noqa: E402
from marc_import.mapping import build_mapping_table  # noqa: E402
from marc_import.walker import DispatchContext, HandlerOptions, datafield_source  # noqa: E402

LEADER_MONOGRAPH = "00000nam a2200000 c 4500"


@pytest.fixture(scope="session")
def config():
    return load_config()


@pytest.fixture(scope="session")
def table(config):
    return build_mapping_table(config)


@pytest.fixture
def epdata(table):
    return EPData(table.policies)


@pytest.fixture
def datafield_options(config):
    """
    Build (DataField, HandlerOptions) for calling a handler directly:

        field, opts = datafield_options("773", [("t", "Journal"), ("7", "nnas")])
    """

    def make(tag, subfields, ind1=" ", ind2=" ", code=None):
        field = DataField(
            tag=tag,
            ind1=ind1,
            ind2=ind2,
            subfields=tuple(Subfield(c, v) for c, v in subfields),
        )
        opts = HandlerOptions(
            ind1=ind1,
            ind2=ind2,
            context=DispatchContext(field),
            config=config,
            source=datafield_source(tag, code or subfields[0][0]),
        )
        return field, opts

    return make


def _subfields_xml(subfields):
    return "".join(f'<subfield code="{code}">{value}</subfield>' for code, value in subfields)


@pytest.fixture
def marc_xml():
    """
    Build a namespaced MARC21 slim record:

        marc_xml(leader=..., controlfields=[("008", "...")],
                 datafields=[("245", "1", "0", [("a", "Title")])])
    """

    def make(leader=LEADER_MONOGRAPH, controlfields=(), datafields=(), extra=""):
        parts = ['<record xmlns="http://www.loc.gov/MARC21/slim">']
        if leader is not None:
            parts.append(f"<leader>{leader}</leader>")
        for tag, value in controlfields:
            parts.append(f'<controlfield tag="{tag}">{value}</controlfield>')
        for tag, ind1, ind2, subfields in datafields:
            parts.append(
                f'<datafield tag="{tag}" ind1="{ind1}" ind2="{ind2}">{_subfields_xml(subfields)}</datafield>'
            )
        parts.append(extra)
        parts.append("</record>")
        return "".join(parts)

    return make


@pytest.fixture
def marc_logs(caplog):
    """caplog for the project logger, which does not propagate to root."""
    logger = logging.getLogger("marc_import")
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="marc_import")
    yield caplog
    logger.removeHandler(caplog.handler)
