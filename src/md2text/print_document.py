"""Printable HTML document wrapping converted plain text."""

import html

PRINT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>{title}</title>
    <style>
      body {{
        font-family: sans-serif;
        line-height: 1.5;
        margin: 2cm;
      }}
      pre {{
        white-space: pre-wrap;
        font-family: monospace;
      }}
    </style>
  </head>
  <body>
    <pre>{text}</pre>
  </body>
</html>
"""


def render_print_document(text: str, title: str = "Converted Markdown Text") -> str:
    """
    Embed plain text in a minimal HTML page for printing or PDF rendering.

    The text is escaped so it renders exactly as given; ``pre-wrap`` keeps
    line breaks and runs of spaces.

    Args:
        text: Converted plain text
        title: Document title

    Returns:
        Complete HTML document
    """
    return PRINT_TEMPLATE.format(
        title=html.escape(title),
        text=html.escape(text, quote=False),
    )
