"""Rust source generation for sqlx-codegen.

Turns the normalized schema model into one ``<table>.rs`` per table plus a
``mod.rs`` declaring them.
"""

from .generator import ModelRenderer, ModelWriter, MOD_FILE_NAME, normalize_output_path

__all__ = [
    "ModelRenderer",
    "ModelWriter",
    "MOD_FILE_NAME",
    "normalize_output_path",
]
