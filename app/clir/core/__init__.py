"""Core building blocks: paths, configuration, logging and the path tree."""
