"""
JTool terminal UI.

A Textual-based terminal UI for normalizing, re-stringifying and
comparing JSON documents.

Usage:
    jtool-tui [OLD NEW]

Components:
    - JToolApp: Main application class
    - EditorScreen: Input/output editors with an action bar
    - ComparisonScreen: Side-by-side comparison view
    - JsonTreePanel: Synchronized JSON tree widget
    - build_diff_map: Diff highlighting utility
"""
