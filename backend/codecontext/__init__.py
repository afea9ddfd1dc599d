"""codecontext: retrieval-augmented context for code-aware chat."""
