# topmark:header:start
#
#   project      : TagMark
#   file         : __init__.py
#   file_relpath : src/tagmark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TagMark configuration and logging.

Modules:
    - `tagmark.config.model`: immutable `Config` and the `MutableConfig` builder.
    - `tagmark.config.io`: TOML loading (`tomlkit`) and checked value getters.
    - `tagmark.config.logging`: TRACE-aware, colored logging setup.

Nothing is re-exported here: `tagmark.config.logging` is imported by almost
every module, so this package must stay import-light.
"""
