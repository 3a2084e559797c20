import json
import logging
import signal
from pathlib import Path

import click

from .logging_config import setup_logging
from .pipeline import (
    AtomicWriter,
    CancellationToken,
    CSharpSourceReader,
    CSharpSymbolResolver,
    GeneratorConfig,
    OutputMode,
    ReactiveGeneratorError,
    ReactivePropertyGenerator,
)

logger = logging.getLogger(__name__)


@click.command()
@click.option("--output", "-o", default=".", type=click.Path(file_okay=False, resolve_path=True), help="Directory for generated files")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--force", is_flag=True, default=False, help="Overwrite existing generated files")
@click.option("--no-validate", is_flag=True, default=False, help="Write artifacts without parsing them first")
@click.option("--include-generated", is_flag=True, default=False, help="Also read *.g.cs input files")
@click.option("--simple-names", is_flag=True, default=False, help="Name artifacts by simple type name only")
@click.option("--dry-run", is_flag=True, default=False, help="List the artifacts without writing them")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging.")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, resolve_path=True))
def reactive_property_gen(output, config, force, no_validate, include_generated, simple_names, dry_run, verbose, debug, paths):
    if debug:
        setup_logging(logging.DEBUG)
    elif verbose:
        setup_logging(logging.INFO)
    else:
        setup_logging(logging.WARNING)

    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    # CLI flags override the config file
    if force:
        config.output.mode = OutputMode.FORCE
    if no_validate:
        config.output.validate_before_write = False
    if simple_names:
        config.qualify_artifact_names = False
    logger.debug("Configuration: %s", config.to_dict())

    cancellation = CancellationToken()
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: cancellation.cancel())
    try:
        sources = CSharpSourceReader().read_paths(paths, exclude_generated=not include_generated)

        # The marker artifact is part of the compilation the generated code lands in
        resolver = CSharpSymbolResolver(sources.type_names)
        resolver.add_type(config.marker_full_name)

        artifacts = ReactivePropertyGenerator(resolver, config).generate(sources.types, cancellation)

        if dry_run:
            for artifact in artifacts:
                click.echo(artifact.name)
            return

        written = AtomicWriter().write_artifacts(Path(output), artifacts, config.output)
    except (ReactiveGeneratorError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    click.echo(f"Generated {len(written)} file(s) in {output}")
