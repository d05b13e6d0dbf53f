"""JavaScript + JSX code generation."""

from jsxtv.codegen.printer import CodePrinter, generate, quote_string

__all__ = ["CodePrinter", "generate", "quote_string"]
