"""Service layer — operations shared by the CLI and library callers."""
