"""Built-in sample document covering every supported Markdown construct."""

SAMPLE_MARKDOWN = """# Markdown Converter

This tool turns **Markdown** into *plain text* while keeping the reading flow.

## Emphasis

You can write ***bold italic***, __bold__, _italic_ and ~~struck~~ text.
Inline code such as `print("hello")` keeps only its content.

## Lists

- First item
- Second item
  * Nested item

1. Step one
2. Step two

---

## Links and images

Read the [documentation](https://example.com/docs) or look at
![a diagram](https://example.com/diagram.png).

> Quoted text loses its marker.

```python
# Code blocks are kept verbatim
value = "*not emphasis*"
```



The blank lines above collapse to one.
"""


def get_sample_markdown() -> str:
    """Return the sample Markdown document."""
    return SAMPLE_MARKDOWN
