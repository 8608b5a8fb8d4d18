# topmark:header:start
#
#   project      : TagMark
#   file         : __init__.py
#   file_relpath : tests/engine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end
