"""TwinPane: a terminal side-by-side text diff and conversion tool.

Input A and input B are diffed character by character and shown as two
aligned, line-numbered panes; single-input tools (JSON, Unix time, number
bases, URL and base64 coding) share the same screen.
"""

__version__ = "0.1.0"
