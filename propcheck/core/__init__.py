"""propcheck core — AST host layer and instrumentation engine."""
