import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from json_schema_to_rust import (
    CodeGeneratorConfig,
    FormatterError,
    OutputMode,
    OutputValidationError,
    PipelineGenerator,
    SchemaParseError,
    generate,
)

SCHEMAS_DIR = Path(__file__).parent / "test_data" / "schemas"

NO_HEADER = CodeGeneratorConfig(add_generation_comment=False)


def load_schema(name):
    with open(SCHEMAS_DIR / name) as f:
        return json.load(f)


@pytest.fixture(scope="module")
def meta_schema_code():
    return PipelineGenerator("schema", load_schema("schema.json"), NO_HEADER).generate()


@pytest.fixture(scope="module")
def debugserver_code():
    return PipelineGenerator(None, load_schema("debugserver.schema.json"), NO_HEADER).generate()


class TestMetaSchema:
    def test_definitions(self, meta_schema_code):
        assert "pub type SchemaArray = Vec<Schema>;" in meta_schema_code
        assert "pub type PositiveInteger = i64;" in meta_schema_code
        assert "pub type PositiveIntegerDefault0 = serde_json::Value;" in meta_schema_code
        assert "pub type StringArray = Vec<String>;" in meta_schema_code

    def test_simple_types_enum(self, meta_schema_code):
        assert (
            "#[derive(Clone, PartialEq, Debug, Deserialize, Serialize)]\n"
            '#[serde(rename = "simpleTypes")]\n'
            "pub enum SimpleTypes {\n"
            '    #[serde(rename = "array")]\n'
            "    Array,\n"
        ) in meta_schema_code

    def test_root_struct(self, meta_schema_code):
        assert '#[serde(rename = "schema")]\npub struct Schema {' in meta_schema_code
        assert "#[derive(Clone, PartialEq, Debug, Deserialize, Serialize)]\n" '#[serde(rename = "schema")]' in meta_schema_code

    def test_one_or_many_fields(self, meta_schema_code):
        assert '    #[serde(default)]\n    #[serde(rename = "type")]\n    pub type_: OneOrMany<SimpleTypes>,' in meta_schema_code
        assert "    #[serde(default)]\n    pub items: OneOrMany<Schema>," in meta_schema_code
        assert meta_schema_code.count("pub enum OneOrMany<T>") == 1

    def test_recursive_fields(self, meta_schema_code):
        assert "    pub not: Option<Box<Schema>>," in meta_schema_code
        assert "    #[serde(default)]\n    pub definitions: ::std::collections::BTreeMap<String, Schema>," in meta_schema_code
        assert "    pub dependencies: Option<::std::collections::BTreeMap<String, serde_json::Value>>," in meta_schema_code

    def test_renamed_fields(self, meta_schema_code):
        assert '    #[serde(rename = "$schema")]\n    pub schema: Option<String>,' in meta_schema_code
        assert '    #[serde(rename = "enum")]\n    pub enum_: Option<Vec<serde_json::Value>>,' in meta_schema_code
        assert '    #[serde(rename = "minLength")]\n    pub min_length: Option<PositiveIntegerDefault0>,' in meta_schema_code

    def test_definitions_come_before_root(self, meta_schema_code):
        assert meta_schema_code.index("pub type SchemaArray") < meta_schema_code.index("pub struct Schema {")


class TestDebugServer:
    def test_all_of_chain(self, debugserver_code):
        assert (
            "#[derive(Clone, PartialEq, Debug, Deserialize, Serialize)]\n"
            "pub struct SourceRequest {\n"
            "    /// Sequence number.\n"
            "    pub seq: i64,\n"
            "    /// Message type.\n"
            '    #[serde(rename = "type")]\n'
            "    pub type_: String,\n"
            "    /// The command to execute.\n"
            "    pub command: String,\n"
            "    /// Object containing arguments for the command.\n"
            "    pub arguments: SourceArguments,\n"
            "}"
        ) in debugserver_code

    def test_intermediate_request(self, debugserver_code):
        assert "    pub arguments: Option<serde_json::Value>," in debugserver_code
        assert "\npub struct Request {" in debugserver_code

    def test_struct_description(self, debugserver_code):
        assert "/// Base class of requests, responses, and events.\n#[derive(" in debugserver_code

    def test_default_struct(self, debugserver_code):
        assert (
            "/// A Source is a descriptor for source code.\n"
            "#[derive(Clone, PartialEq, Debug, Default, Deserialize, Serialize)]\n"
            "pub struct Source {\n"
        ) in debugserver_code
        assert "    pub sources: Option<Vec<Source>>," in debugserver_code
        assert '    #[serde(rename = "sourceReference")]\n    pub source_reference: Option<f64>,' in debugserver_code

    def test_enum_variants(self, debugserver_code):
        assert (
            "pub enum ChecksumAlgorithm {\n"
            '    #[serde(rename = "MD5")]\n'
            "    Md5,\n"
            '    #[serde(rename = "SHA1")]\n'
            "    Sha1,\n"
            '    #[serde(rename = "SHA256")]\n'
            "    Sha256,\n"
            '    #[serde(rename = "timestamp")]\n'
            "    Timestamp,\n"
            "}"
        ) in debugserver_code

    def test_multi_typed_field(self, debugserver_code):
        assert '    #[serde(rename = "moduleId")]\n    pub module_id: Option<serde_json::Value>,' in debugserver_code

    def test_map_alias(self, debugserver_code):
        assert "pub type Variables = ::std::collections::BTreeMap<String, String>;" in debugserver_code

    def test_no_one_or_many_helper(self, debugserver_code):
        assert "OneOrMany" not in debugserver_code


def test_generation_is_deterministic():
    schema = load_schema("schema.json")
    assert PipelineGenerator("schema", schema).generate() == PipelineGenerator("schema", schema).generate()


def test_generate_from_text():
    code = generate("point", '{"properties": {"x": {"type": "number"}}, "required": ["x"]}', NO_HEADER)
    assert "pub struct Point {\n    pub x: f64,\n}" in code


def test_generate_invalid_json():
    with pytest.raises(SchemaParseError):
        generate("point", "{not json")


def test_analyze_returns_ir():
    ir = PipelineGenerator("point", {"properties": {"x": {}}}).analyze()
    assert [d.name for d in ir.declarations] == ["Point"]


class TestFormatter:
    def fake_run(self, cmd, **kwargs):
        if "--version" in cmd:
            return subprocess.CompletedProcess(cmd, 0, stdout="rustfmt 1.7.0\n", stderr="")
        return subprocess.CompletedProcess(cmd, 0, stdout="// formatted\n" + kwargs["input"], stderr="")

    def test_formatter_output_is_returned(self):
        config = CodeGeneratorConfig()
        config.formatter.enabled = True
        with patch("json_schema_to_rust.pipeline.formatters.rustfmt_formatter.subprocess.run", side_effect=self.fake_run):
            code = PipelineGenerator("point", {"properties": {"x": {}}}, config).generate()
        assert code.startswith("// formatted\n")

    def test_formatter_disabled_by_default(self):
        with patch("json_schema_to_rust.pipeline.formatters.rustfmt_formatter.subprocess.run") as run:
            PipelineGenerator("point", {"properties": {"x": {}}}).generate()
        run.assert_not_called()

    def test_missing_formatter_is_fatal(self):
        config = CodeGeneratorConfig()
        config.formatter.enabled = True
        with patch(
            "json_schema_to_rust.pipeline.formatters.rustfmt_formatter.subprocess.run",
            side_effect=FileNotFoundError,
        ):
            with pytest.raises(FormatterError):
                PipelineGenerator("point", {"properties": {"x": {}}}, config).generate()


class TestGenerateToFile:
    schema = {"properties": {"x": {"type": "integer"}}}

    def test_writes_file(self, tmp_path):
        path = tmp_path / "out" / "point.rs"
        code = PipelineGenerator("point", self.schema).generate_to_file(path)
        assert path.read_text() == code

    def test_refuses_to_overwrite(self, tmp_path):
        path = tmp_path / "point.rs"
        path.write_text("// keep me\n")
        with pytest.raises(FileExistsError):
            PipelineGenerator("point", self.schema).generate_to_file(path)
        assert path.read_text() == "// keep me\n"

    def test_force_overwrites(self, tmp_path):
        path = tmp_path / "point.rs"
        path.write_text("// old\n")
        config = CodeGeneratorConfig()
        config.output.mode = OutputMode.FORCE
        code = PipelineGenerator("point", self.schema, config).generate_to_file(path)
        assert path.read_text() == code

    def test_non_atomic_write(self, tmp_path):
        path = tmp_path / "point.rs"
        config = CodeGeneratorConfig()
        config.output.atomic_write = False
        PipelineGenerator("point", self.schema, config).generate_to_file(str(path))
        assert "pub struct Point {" in path.read_text()

    def test_validation_failure(self, tmp_path):
        path = tmp_path / "empty.rs"
        with pytest.raises(OutputValidationError):
            PipelineGenerator(None, {"properties": {"x": {}}}).generate_to_file(path)
        assert not path.exists()


def test_definition_names_are_legal_identifiers():
    code = generate(
        None,
        '{"definitions": {"3dPoint": {"type": "integer"}, "self": {"type": "string"}}}',
        NO_HEADER,
    )
    assert "pub type T3DPoint = i64;" in code
    assert "pub type Self_ = String;" in code
