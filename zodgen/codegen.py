"""Render templates and write generated output.

Component and operation generators hand their template context to the
render functions here; write_artifacts() persists the finished artifacts.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jinja2

from .models import Artifact

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_OUTPUT_DIR = Path("schema")

# Group holding component schema artifacts; never a valid operation group
COMPONENTS_DIR = "_components"
OPERATION_FILE_NAME = "schema.ts"


def jsdoc(text: Any) -> str:
    """Make free text safe inside a /** */ block."""
    lines = str(text).replace("*/", "*\\/").strip().splitlines() or [""]
    return "\n * ".join(line.rstrip() for line in lines)


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["jsdoc"] = jsdoc
    return env


_ENV = _environment()


def render_component(context: dict[str, Any]) -> str:
    """Render a component schema file."""
    return _ENV.get_template("component.ts.j2").render(**context)


def render_operation(context: dict[str, Any]) -> str:
    """Render an operation schema file."""
    return _ENV.get_template("operation.ts.j2").render(
        components_dir=COMPONENTS_DIR, **context
    )


@dataclass
class WriteSummary:
    file_count: int = 0
    operation_count: int = 0
    component_count: int = 0
    directory_count: int = 0
    sample_operations: list[str] = field(default_factory=list)


def write_artifacts(
    artifacts: list[Artifact],
    output_dir: Path | str | None = None,
) -> WriteSummary:
    """Replace output_dir with the given artifacts."""
    out = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR
    if out.exists():
        shutil.rmtree(out)
    out.mkdir(parents=True)

    summary = WriteSummary()
    directories: set[str] = set()
    for artifact in artifacts:
        target_dir = out / artifact.dir_name if artifact.dir_name else out
        target_dir.mkdir(parents=True, exist_ok=True)
        if artifact.dir_name:
            directories.add(artifact.dir_name)

        output_path = target_dir / artifact.file_name
        output_path.write_text(artifact.content, encoding="utf-8")
        logger.debug("Wrote %s", output_path)
        summary.file_count += 1

        if artifact.dir_name == COMPONENTS_DIR:
            summary.component_count += 1
        elif artifact.dir_name:
            summary.operation_count += 1
            if len(summary.sample_operations) < 5:
                summary.sample_operations.append(artifact.dir_name)

    summary.directory_count = len(directories)
    return summary
