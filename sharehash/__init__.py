"""ShareHash command-line tool."""
