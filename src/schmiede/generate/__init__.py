"""Code generation: transformers, templates and exporters."""

from schmiede.generate.generator import Generator, validate_request
from schmiede.generate.options import GenerateOption
from schmiede.generate.templates import TemplateRenderer
from schmiede.generate.transformers import (
    SqlTransformer,
    StructTransformer,
    TransformerKind,
    get_transformer,
    render_rows,
)

__all__ = [
    "GenerateOption",
    "Generator",
    "SqlTransformer",
    "StructTransformer",
    "TemplateRenderer",
    "TransformerKind",
    "get_transformer",
    "render_rows",
    "validate_request",
]
