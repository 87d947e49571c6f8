import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from json_schema_to_rust.json_schema_to_rust import json_schema_to_rust

SCHEMAS_DIR = Path(__file__).parent / "test_data" / "schemas"


@pytest.fixture
def runner():
    return CliRunner()


def test_prints_to_stdout(runner):
    result = runner.invoke(json_schema_to_rust, [str(SCHEMAS_DIR / "schema.json")])
    assert result.exit_code == 0, result.output
    assert "pub struct Schema {" in result.output
    assert result.output.startswith("// This file was generated by json_schema_to_rust")


def test_root_without_properties_is_not_declared(runner):
    result = runner.invoke(json_schema_to_rust, [str(SCHEMAS_DIR / "debugserver.schema.json")])
    assert result.exit_code == 0, result.output
    assert "pub struct SourceRequest {" in result.output
    assert "Debugserver" not in result.output


def test_explicit_name(runner):
    result = runner.invoke(json_schema_to_rust, ["--name", "MetaSchema", str(SCHEMAS_DIR / "schema.json")])
    assert result.exit_code == 0, result.output
    assert "pub struct MetaSchema {" in result.output
    assert "pub not: Option<Box<MetaSchema>>," in result.output


def test_writes_output_file(runner, tmp_path):
    output = tmp_path / "schema.rs"
    result = runner.invoke(json_schema_to_rust, [str(SCHEMAS_DIR / "schema.json"), str(output)])
    assert result.exit_code == 0, result.output
    assert "pub struct Schema {" in output.read_text()

    result = runner.invoke(json_schema_to_rust, [str(SCHEMAS_DIR / "schema.json"), str(output)])
    assert result.exit_code == 1
    assert "already exists" in result.output

    result = runner.invoke(json_schema_to_rust, ["--force", str(SCHEMAS_DIR / "schema.json"), str(output)])
    assert result.exit_code == 0, result.output


def test_config_file(runner, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"add_generation_comment": False, "map_type": "::std::collections::HashMap"}))
    result = runner.invoke(json_schema_to_rust, ["-c", str(config), str(SCHEMAS_DIR / "schema.json")])
    assert result.exit_code == 0, result.output
    assert result.output.startswith("use serde::{Deserialize, Serialize};")
    assert "::std::collections::HashMap<String, Schema>" in result.output


def test_invalid_json(runner, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{")
    result = runner.invoke(json_schema_to_rust, [str(path)])
    assert result.exit_code == 1
    assert "is not valid JSON" in result.output


def test_schema_errors_are_reported(runner, tmp_path):
    path = tmp_path / "enum.json"
    path.write_text(json.dumps({"definitions": {"level": {"enum": [1, 2]}}}))
    result = runner.invoke(json_schema_to_rust, [str(path)])
    assert result.exit_code == 1
    assert "non-string value" in result.output
