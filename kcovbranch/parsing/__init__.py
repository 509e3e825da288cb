"""tree-sitter front end for C sources."""
