import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from linestyle.engine import LinterEngine
from linestyle.errors import ConfigurationError
from linestyle.models import Diagnostic, Severity
from linestyle.registry import registry

from .config import LintConfig
from .converters import diagnostic_to_lint_issue

SOURCE_SUFFIXES = (".js", ".mjs", ".cjs", ".jsx", ".ts", ".tsx")

logger = logging.getLogger(__name__)

app = typer.Typer(help="linestyle - check and fix line-based style issues")


def collect_files(paths: List[Path]) -> List[Path]:
    """Expand directories into the source files they contain"""
    files = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in SOURCE_SUFFIXES)
            )
        else:
            files.append(path)
    return files


def read_source(path: Path) -> str:
    # newline="" keeps \r\n and bare \r as they are on disk
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_source(path: Path, text: str):
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


@app.command()
def lint(
    paths: List[Path] = typer.Argument(..., help="Files or directories to lint"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="Path to config file (default: .linestyle.toml or pyproject.toml in the current directory)"
    ),
    fix: bool = typer.Option(False, help="Automatically fix issues and write files back"),
    fix_rule: Optional[List[str]] = typer.Option(None, "--fix-rule", help="Only fix issues from these rules"),
    max_passes: Optional[int] = typer.Option(None, min=1, help="Maximum scan/fix passes per file"),
    output_format: str = typer.Option("text", "--format", help="Output format: text or json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Run style rules on source files"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = LintConfig(config_file)
        rules = config.apply_to_registry(registry)
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2)

    if max_passes is None:
        max_passes = config.max_passes
    engine = LinterEngine(rules, max_passes=max_passes)
    results: list[tuple[Path, list[Diagnostic]]] = []
    should_fix = None
    if fix_rule:
        selected = set(fix_rule)

        def should_fix(diagnostic: Diagnostic) -> bool:
            return diagnostic.rule_id in selected

    for file_path in collect_files(paths):
        logger.debug("Linting %s", file_path)
        source = read_source(file_path)
        if fix:
            report = engine.fix_text(source, should_fix)
            if report.fixed:
                write_source(file_path, report.output)
                typer.echo(f"Fixed {report.fixed_count} issue(s) in {file_path} ({report.passes} passes)")
            diagnostics = report.diagnostics
        else:
            diagnostics = engine.lint_text(source)
        results.append((file_path, diagnostics))

    issues = [diagnostic_to_lint_issue(d, path) for path, diagnostics in results for d in diagnostics]

    if output_format == "json":
        typer.echo(json.dumps([issue.model_dump(mode="json") for issue in issues], indent=2))
    else:
        for issue in issues:
            typer.echo(
                f"{issue.file_path}:{issue.line_number}:{issue.column}: "
                f"{issue.severity.value.upper()} [{issue.rule_id}] {issue.message}"
            )
        typer.echo(f"\nTotal issues found: {len(issues)}")

    if any(issue.severity == Severity.ERROR for issue in issues):
        raise typer.Exit(code=1)


@app.command()
def rules():
    """List available rules"""
    for rule in registry.get_all_rules():
        fixable = " (fixable)" if rule.fixable else ""
        typer.echo(f"{rule.rule_id}{fixable}: {rule.description}")


if __name__ == "__main__":
    app()
