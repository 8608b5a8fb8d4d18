# topmark:header:start
#
#   project      : TagMark
#   file         : __init__.py
#   file_relpath : tests/tags/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end
