"""Client layer: command-line tools, web API and HTTP client."""
