"""
GitHub Release installer — install tagged release assets into a local tree.

Usage:
    python -m ghr_installer.main install owner/project@1.2.3 --base-directory ~/.ghri
"""

__version__ = "0.1.0"
