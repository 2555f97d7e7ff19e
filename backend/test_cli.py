"""Tests for the command line entry point and library logging setup"""

import logging

from ontograph import render_graph
from ontograph.__main__ import main
from ontograph.ir.models import ClassRecord, OntologyModel

MODEL_YAML = """
classes:
  - name: "ex:A"
    label: "A (ex:A)"
"""


def test_cli_writes_document(tmp_path):
    model = tmp_path / "model.yaml"
    model.write_text(MODEL_YAML)
    output = tmp_path / "out.graphml"

    assert main([str(model), "--title", "Test", "--visualization", "graffoo", "-o", str(output)]) == 0

    document = output.read_text(encoding="utf-8")
    assert document.endswith("</graphml>")
    assert '<node id="ex:A">' in document


def test_cli_reports_invalid_request(tmp_path, caplog):
    model = tmp_path / "model.yaml"
    model.write_text(MODEL_YAML)

    assert main([str(model), "--title", "Test", "--visualization", "vowl", "--graph-type", "individual"]) == 1
    assert any(r.levelno == logging.ERROR and r.name == "ontograph.__main__" for r in caplog.records)


def test_rendering_leaves_root_logger_alone():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level

    render_graph(
        {"graph_title": "Test", "visualization": "custom", "graph_type": "class"},
        OntologyModel(classes=[ClassRecord("ex:A", "A (ex:A)")]),
    )

    assert root.handlers == handlers
    assert root.level == level
