"""
Layout definitions sub-package for log-transform.

Contains YAML files that describe each known log line layout (separator,
ordered parts, converters). The loader module (layout_registry.py in the
parent package) reads these files at runtime.
"""
