"""HTTP adapter for codecontext."""
