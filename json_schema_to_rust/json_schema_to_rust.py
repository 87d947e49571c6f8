import json
import logging
from pathlib import Path

import click

from .pipeline import CodeGeneratorConfig, OutputMode, PipelineGenerator, SchemaGenerationError


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Root type name (defaults to the file stem when the root has properties)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--rustfmt", is_flag=True, default=False, help="Pipe the generated code through rustfmt")
@click.option("--force", is_flag=True, default=False, help="Overwrite OUTPUT if it already exists")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", required=False, default=None, type=click.Path(resolve_path=True))
def json_schema_to_rust(name, config, rustfmt, force, verbose, path, output):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    with open(path) as f:
        try:
            schema = json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"{path} is not valid JSON: {e}") from e

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if rustfmt:
        config.formatter.enabled = True
    if force:
        config.output.mode = OutputMode.FORCE

    if name is None and "properties" in schema:
        name = Path(path).stem.split(".")[0]

    codegen = PipelineGenerator(name, schema, config)

    try:
        if output is None:
            click.echo(codegen.generate(), nl=False)
        else:
            codegen.generate_to_file(output)
    except (SchemaGenerationError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e
