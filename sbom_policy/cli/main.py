"""Command-line interface for sbom-policy."""

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from .._evaluation import evaluate_materials, load_curator, load_policy
from ..console import print_error, print_material_result, print_summary
from ..exceptions import ConfigurationError, EvaluationFailedError, SbomPolicyError
from ..formats import SourceFormat, detect_source_format
from ..loader import load_materials_from_file
from ..logging_config import logger, set_log_level

SBOM_POLICY_VERSION = __version__

OUTPUT_FORMATS = ("human", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Exit codes: policy failures are kept apart from fatal errors
EXIT_OK = 0
EXIT_POLICY_FAILURE = 1
EXIT_ERROR = 2

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@dataclass
class Config:
    """Configuration for one evaluation run."""

    source: str
    source_format: Optional[SourceFormat] = None
    policy_file: Optional[str] = None
    curation_file: Optional[str] = None
    output_format: str = "human"

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.source:
            raise ConfigurationError("Source file is not defined")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid output format '{self.output_format}'. Expected one of: {', '.join(OUTPUT_FORMATS)}"
            )
        for label, path in (("Policy", self.policy_file), ("Curation", self.curation_file)):
            if path is not None and Path(path).is_dir():
                raise ConfigurationError(f"{label} script {path} is a directory")

    @property
    def resolved_format(self) -> SourceFormat:
        """The explicit source format, or the one detected from the file name."""
        if self.source_format is not None:
            return self.source_format
        return detect_source_format(self.source)


def build_config(
    source: str,
    source_type: Optional[str] = None,
    policy_file: Optional[str] = None,
    curation_file: Optional[str] = None,
    output_format: str = "human",
) -> Config:
    """
    Assemble and validate a Config from raw option values.

    Raises:
        ConfigurationError: If a value is invalid
    """
    source_format = None
    if source_type:
        try:
            source_format = SourceFormat.from_name(source_type)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    config = Config(
        source=source,
        source_format=source_format,
        policy_file=policy_file or None,
        curation_file=curation_file or None,
        output_format=output_format.lower(),
    )
    config.validate()
    return config


def run_evaluation(config: Config) -> int:
    """
    Run one evaluation and render its results.

    Human output is printed per material while the run progresses; JSON
    output is printed only once the whole run has succeeded.

    Returns:
        EXIT_OK, EXIT_POLICY_FAILURE or EXIT_ERROR
    """
    human = config.output_format == "human"

    try:
        policy = load_policy(config.policy_file)
        curator = load_curator(config.curation_file)
        materials = load_materials_from_file(config.source, config.resolved_format)
        report = evaluate_materials(
            materials,
            curator,
            policy,
            on_result=print_material_result if human else None,
        )
    except SbomPolicyError as e:
        logger.debug(f"Evaluation aborted: {type(e).__name__}: {e}")
        print_error(str(e))
        return EXIT_ERROR

    if human:
        print_summary(report)
    else:
        click.echo(json.dumps(report.to_list()))

    try:
        report.raise_for_failure()
    except EvaluationFailedError as e:
        logger.info(str(e))
        return EXIT_POLICY_FAILURE

    return EXIT_OK


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(SBOM_POLICY_VERSION, "-V", "--version", prog_name="sbom-policy")
@click.option(
    "--log-level",
    envvar="LOG_LEVEL",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity (logs go to stderr).",
)
def cli(log_level: str) -> None:
    """Check software bills of materials against license policies."""
    set_log_level(log_level)


@cli.command("evaluate")
@click.option(
    "-p",
    "--policy",
    "policy_file",
    envvar="SBOM_POLICY_FILE",
    type=click.Path(dir_okay=False),
    metavar="FILE",
    help="Policy script defining evaluate(material, result). [env: SBOM_POLICY_FILE]",
)
@click.option(
    "-c",
    "--curation",
    "curation_file",
    envvar="SBOM_CURATION_FILE",
    type=click.Path(dir_okay=False),
    metavar="FILE",
    help="Curation script defining curate_material(material). [env: SBOM_CURATION_FILE]",
)
@click.option(
    "-t",
    "--source-type",
    "source_type",
    envvar="SBOM_SOURCE_TYPE",
    type=click.Choice(SourceFormat.names(), case_sensitive=False),
    help="Source format; detected from the file name when omitted. [env: SBOM_SOURCE_TYPE]",
)
@click.option(
    "-o",
    "--output",
    "output_format",
    envvar="SBOM_OUTPUT_FORMAT",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default="human",
    show_default=True,
    help="Report format. [env: SBOM_OUTPUT_FORMAT]",
)
@click.argument("source", type=click.Path(dir_okay=False))
def evaluate_command(
    policy_file: Optional[str],
    curation_file: Optional[str],
    source_type: Optional[str],
    output_format: str,
    source: str,
) -> None:
    """Evaluate every material in SOURCE against the policy."""
    try:
        config = build_config(
            source=source,
            source_type=source_type,
            policy_file=policy_file,
            curation_file=curation_file,
            output_format=output_format,
        )
    except ConfigurationError as e:
        print_error(f"Configuration error: {e}")
        sys.exit(EXIT_ERROR)

    sys.exit(run_evaluation(config))


def main() -> None:
    """Console script entry point."""
    cli()
