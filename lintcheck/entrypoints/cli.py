from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from lintcheck import __version__
from lintcheck.configuration import Configuration
from lintcheck.errors import LintcheckError
from lintcheck.rules.registry import DEFAULT_REGISTRY
from lintcheck.settings import VerifierSettings
from lintcheck.verification.conformance_verifier import verify_rule
from .base import correct_paths, lint_paths

app = typer.Typer(
    name="lintcheck",
    add_completion=False,
    no_args_is_help=True,
    help="Lint sources and verify that style rules behave as they declare.",
)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="YAML configuration selecting and configuring rules.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

PathsArgument = Annotated[
    list[Path],
    typer.Argument(help="Files or directories to process.", exists=True, resolve_path=True),
]


def _load_configuration(config: Path | None) -> Configuration:
    if config is None:
        return Configuration()
    try:
        return Configuration.from_yaml(config)
    except (OSError, LintcheckError) as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from e


@app.callback()
def configure(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log progress to stderr.")
    ] = False,
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("rules")
def list_rules() -> None:
    """List every registered rule."""
    for rule in DEFAULT_REGISTRY:
        description = rule.description
        typer.echo(f"{description.identifier} ({rule.dialect.name}): {description.description}")


@app.command("lint")
def lint(paths: PathsArgument, config: ConfigOption = None) -> None:
    """Print violations found in the given paths.

    Args:
        paths: Files or directories to lint.
        config: Optional configuration file.
    """
    configuration = _load_configuration(config)
    try:
        diagnostics = lint_paths(paths, configuration)
    except (OSError, ValueError, LintcheckError) as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from e

    for diagnostic in diagnostics:
        typer.echo(str(diagnostic))
    if diagnostics:
        typer.secho(f"Found {len(diagnostics)} violation(s)", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho("No violations found", fg=typer.colors.GREEN, err=True)


@app.command("autocorrect")
def autocorrect(paths: PathsArgument, config: ConfigOption = None) -> None:
    """Rewrite the given paths in place, fixing correctable violations.

    Args:
        paths: Files or directories to correct.
        config: Optional configuration file.
    """
    configuration = _load_configuration(config)
    try:
        corrections = correct_paths(paths, configuration)
    except (OSError, ValueError, LintcheckError) as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from e

    for correction in corrections:
        typer.echo(str(correction))
    typer.secho(f"Applied {len(corrections)} correction(s)", fg=typer.colors.GREEN, err=True)


@app.command("verify")
def verify(
    rule_identifiers: Annotated[
        Optional[list[str]],
        typer.Argument(help="Rules to verify; every registered rule when omitted."),
    ] = None,
    scratch_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--scratch-dir",
            help="Directory for correction scratch files.",
            envvar="LINTCHECK_SCRATCH_DIR",
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
        ),
    ] = None,
) -> None:
    """Check registered rules against the examples they declare.

    Args:
        rule_identifiers: Rules to verify.
        scratch_dir: Directory receiving scratch files.
    """
    settings = VerifierSettings()
    if scratch_dir is not None:
        scratch_dir.mkdir(parents=True, exist_ok=True)
        settings = VerifierSettings(scratch_dir=scratch_dir)
    try:
        rules = [DEFAULT_REGISTRY.get(identifier) for identifier in rule_identifiers or []]
    except LintcheckError as e:
        known = ", ".join(DEFAULT_REGISTRY.identifiers)
        typer.secho(f"{e} (known rules: {known})", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from e

    failed = 0
    for rule in rules or list(DEFAULT_REGISTRY):
        report = verify_rule(rule, settings=settings)
        if report.passed:
            typer.secho(report.summary(), fg=typer.colors.GREEN)
        else:
            failed += 1
            typer.secho(report.summary(), fg=typer.colors.RED)
    if failed:
        raise typer.Exit(code=1)


@app.command("version")
def version() -> None:
    """Print the installed version."""
    typer.echo(__version__)


def main() -> None:
    """Entry point for executing the Typer application."""
    app()


if __name__ == "__main__":
    main()
