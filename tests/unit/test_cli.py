"""Tests for CLI commands."""
import json
from unittest.mock import patch

import pytest

from autoflow.cli import load_graph, main


@pytest.fixture
def workflow_file(tmp_path):
    def write(document):
        path = tmp_path / "workflow.json"
        path.write_text(json.dumps(document))
        return str(path)

    return write


VALID_GRAPH = {
    "nodes": [
        {"id": "hook", "type": "webhook", "config": {"httpMethod": "POST", "path": "/in"}},
        {"id": "cache", "type": "redis", "config": {"action": "get", "key": "k"}},
    ],
    "edges": [{"source": "hook", "target": "cache"}],
}


class TestLoadGraph:
    def test_bare_graph(self, workflow_file):
        graph = load_graph(workflow_file(VALID_GRAPH))

        assert [n.id for n in graph.nodes] == ["hook", "cache"]

    @pytest.mark.parametrize("key", ["graph", "data"])
    def test_workflow_document(self, workflow_file, key):
        graph = load_graph(workflow_file({"id": "wf", key: VALID_GRAPH}))

        assert len(graph.edges) == 1


class TestCommands:
    def test_schemas(self, capsys):
        assert main(["schemas"]) == 0

        schemas = json.loads(capsys.readouterr().out)
        assert any(s["type"] == "send_email" for s in schemas)

    def test_validate_ok(self, workflow_file, capsys):
        assert main(["validate", workflow_file(VALID_GRAPH)]) == 0

        assert "OK: 2 nodes valid" in capsys.readouterr().out

    def test_validate_reports_errors(self, workflow_file, capsys):
        graph = {"nodes": [{"id": "n1", "type": "redis", "label": "Cache", "config": {}}], "edges": []}

        assert main(["validate", workflow_file(graph)]) == 1

        out = capsys.readouterr().out
        assert "n1 (Cache):" in out
        assert "missing required field: action" in out

    def test_validate_warns_on_cycle(self, workflow_file, capsys):
        graph = {
            "nodes": VALID_GRAPH["nodes"],
            "edges": [{"source": "hook", "target": "cache"}, {"source": "cache", "target": "hook"}],
        }

        main(["validate", workflow_file(graph)])

        assert "cycle detected: hook -> cache -> hook" in capsys.readouterr().err

    @patch("autoflow.cli.setup_logging")
    @patch("autoflow.cli.GraphExecutor")
    def test_run_prints_final_context(self, mock_executor, mock_logging, workflow_file, capsys):
        mock_executor.return_value.run.return_value = {"body": {"a": 1}, "done": True}

        code = main([
            "run",
            workflow_file(VALID_GRAPH),
            "--user-id", "u9",
            "--payload", '{"body": {"a": 1}}',
            "--start-node", "cache",
        ])

        assert code == 0
        args = mock_executor.return_value.run.call_args[0]
        assert args[2] == "u9"
        assert args[3] == {"body": {"a": 1}}
        assert args[4] == "cache"
        assert json.loads(capsys.readouterr().out) == {"body": {"a": 1}, "done": True}

    def test_no_command(self, capsys):
        assert main([]) == 1
