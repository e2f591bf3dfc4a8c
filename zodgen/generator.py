"""Turn a parsed OpenAPI document into generated artifacts."""

from __future__ import annotations

import logging
from typing import Any

from .component_generator import ComponentGenerator
from .loader import get_schemas
from .models import Artifact
from .operation_generator import OperationGenerator

logger = logging.getLogger(__name__)


def generate_artifacts(document: dict[str, Any]) -> list[Artifact]:
    """Generate component artifacts followed by operation artifacts."""
    component_files = ComponentGenerator(get_schemas(document)).generate_all()
    operation_files = OperationGenerator(document).generate_all()
    logger.info(
        "Generated %d component schemas and %d operation schemas",
        len(component_files), len(operation_files),
    )
    return [*component_files, *operation_files]
