"""Command-line interface for thriftbuild.

Provides the ``build`` command (the task itself) and ``init-config``.
"""

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from thriftbuild.config import ConfigError
from thriftbuild.config import create_default_config
from thriftbuild.config import load_config
from thriftbuild.models import BuildRequest
from thriftbuild.reporting import configure_logging
from thriftbuild.reporting import get_sink
from thriftbuild.task import ThriftBuild


@click.group()
def cli():
    """thriftbuild - Generate and compile Thrift libraries when definitions change."""
    pass


@cli.command()
@click.option("--thrift-executable", required=True, type=click.Path(path_type=Path), help="Path to the thrift compiler")
@click.option("--thrift-library", required=True, type=click.Path(path_type=Path), help="Path to the Thrift runtime library")
@click.option(
    "--definition-dir",
    required=True,
    type=click.Path(path_type=Path),
    help="Directory containing .thrift files",
)
@click.option("--output-name", required=True, help="File name of the compiled library")
@click.option("--assembly-info", type=click.Path(path_type=Path), default=None, help="Optional metadata source file")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None, help="Config file path")
@click.option("--log-level", default=None, help="Override the configured log level")
def build(
    thrift_executable: Path,
    thrift_library: Path,
    definition_dir: Path,
    output_name: str,
    assembly_info: Path | None,
    config_path: Path | None,
    log_level: str | None,
):
    """Generate code from definitions and compile it, unless already up to date."""
    try:
        settings = load_config(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    configure_logging(log_level or settings.log_level)

    try:
        request = BuildRequest(
            thrift_executable=thrift_executable,
            thrift_library=thrift_library,
            definition_dir=definition_dir,
            output_name=output_name,
            assembly_info=assembly_info,
        )
    except ValidationError as e:
        click.echo(f"Error: invalid build inputs:\n{e}", err=True)
        sys.exit(1)

    try:
        result = ThriftBuild(request, settings=settings, sink=get_sink("thriftbuild.build")).execute()
    except Exception as e:
        import traceback

        click.echo(f"Unexpected error: {e}", err=True)
        click.echo(traceback.format_exc(), err=True)
        sys.exit(1)

    if not result.success:
        click.echo(f"Build failed ({result.failed_step}): {result.message}", err=True)
        sys.exit(1)

    click.echo(str(result.output_path))


@cli.command("init-config")
@click.argument("path", required=False, type=click.Path(path_type=Path))
def init_config(path: Path | None):
    """Write a default thriftbuild.yaml (existing files are left alone)."""
    config_path = create_default_config(path)
    click.echo(f"Config: {config_path}")


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
