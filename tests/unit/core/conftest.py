"""Shared fixtures for core unit tests"""

import pytest
from markdown_it import MarkdownIt

from vibecoder.core.parse import parse_response


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

> A quoted line.

---

Footer paragraph.
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return MarkdownIt("gfm-like", options_update={"linkify": False})


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture(parser):
    return parser.parse(SAMPLE_MD)


@pytest.fixture(name="sample_parsed")
def sample_parsed_fixture():
    return parse_response(SAMPLE_MD)
