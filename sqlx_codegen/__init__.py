"""sqlx-codegen - Generate Rust sqlx models from database schemas."""

__version__ = "0.1.0"
