# topmark:header:start
#
#   project      : TagMark
#   file         : __main__.py
#   file_relpath : src/tagmark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running TagMark via ``python -m tagmark``.

It delegates directly to :func:`tagmark.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how TagMark is launched.

Examples:
    Expand a file::

        python -m tagmark expand README.txt
"""

from __future__ import annotations

from tagmark.cli.main import cli

if __name__ == "__main__":
    cli()
