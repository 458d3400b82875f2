"""
Token resolution and projection engine.

- collector: token tree -> token list + multi-key path index
- resolver: ``{path}`` reference resolution with cycle detection
- classifier: token -> generated variable name and bucket
- inference: component token -> CSS property and selector
- css / theme / report: projections of the resolved variables
"""

from .classifier import (
    Bucket,
    ComponentTokenEntry,
    ProjectedVariables,
    VariableDescriptor,
    VariableMap,
    classify,
    project_palette,
    project_variables,
)
from .collector import Token, TokenIndex, TokenTree, build_index, collect_tokens
from .errors import (
    CircularReferenceError,
    CompilerError,
    ConfigError,
    DocumentParseError,
    DocumentReadError,
    EmptyDocumentError,
    OutputWriteError,
    TokenPipelineError,
    UnresolvedReferenceError,
)
from .inference import build_component_rules, infer_property, infer_selector
from .naming import is_numeric, to_kebab
from .resolver import lookup_resolved, resolve_value

__all__ = [
    # Collection
    "Token",
    "TokenIndex",
    "TokenTree",
    "build_index",
    "collect_tokens",
    # Resolution
    "lookup_resolved",
    "resolve_value",
    # Classification
    "Bucket",
    "ComponentTokenEntry",
    "ProjectedVariables",
    "VariableDescriptor",
    "VariableMap",
    "classify",
    "project_palette",
    "project_variables",
    # Inference
    "build_component_rules",
    "infer_property",
    "infer_selector",
    # Naming
    "is_numeric",
    "to_kebab",
    # Errors
    "CircularReferenceError",
    "CompilerError",
    "ConfigError",
    "DocumentParseError",
    "DocumentReadError",
    "EmptyDocumentError",
    "OutputWriteError",
    "TokenPipelineError",
    "UnresolvedReferenceError",
]
