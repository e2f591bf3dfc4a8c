"""Generate Zod validator schemas from an OpenAPI document."""

from .generator import generate_artifacts

__all__ = ["generate_artifacts"]
