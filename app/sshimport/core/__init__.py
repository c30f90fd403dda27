"""Core building blocks: paths, settings, os-release parsing and theming."""
