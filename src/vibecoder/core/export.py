"""Session export: render interactions as markdown, JSON, plain text, or HTML and write to disk"""

import html
import json
from pathlib import Path
from typing import Callable, Sequence

from vibecoder.core.utils.slug import slugify
from vibecoder.session.history import SessionEntry


TITLE = "Vibe Coder"
RULE_WIDTH = 80
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

HTML_STYLE = """\
body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
.interaction { margin-bottom: 30px; border: 1px solid #ccc; padding: 15px; }
.timestamp { color: #666; font-size: 0.9em; }
.prompt { background: #f0f0f0; padding: 10px; margin: 10px 0; white-space: pre-wrap; }
.response { background: #e8f4f8; padding: 10px; margin: 10px 0; white-space: pre-wrap; }
"""


def _stamp(entry: SessionEntry) -> str:
    return entry.timestamp.strftime(TIMESTAMP_FORMAT)


def export_markdown(entries: Sequence[SessionEntry], title: str = TITLE) -> str:
    parts = [f"# {title} Session Export\n\n"]
    for i, e in enumerate(entries, start=1):
        parts.append(
            f"## Interaction {i}\n\n"
            f"**Timestamp:** {_stamp(e)}\n\n"
            f"**Provider:** {e.provider}\n\n"
            f"### User Prompt\n\n{e.user_prompt}\n\n"
            f"### AI Response\n\n{e.ai_response}\n\n"
            "---\n\n"
        )
    return "".join(parts)


def export_json(entries: Sequence[SessionEntry], title: str = TITLE) -> str:
    return json.dumps([e.model_dump(mode="json") for e in entries], indent=2, ensure_ascii=False)


def export_text(entries: Sequence[SessionEntry], title: str = TITLE) -> str:
    parts = [f"{title.upper()} SESSION EXPORT\n", "=" * RULE_WIDTH, "\n\n"]
    for i, e in enumerate(entries, start=1):
        parts.append(
            f"INTERACTION #{i}\n"
            f"Timestamp: {_stamp(e)}\n"
            f"Provider: {e.provider}\n\n"
            f"USER:\n{e.user_prompt}\n\n"
            f"AI:\n{e.ai_response}\n\n"
        )
        parts.append("-" * RULE_WIDTH + "\n\n")
    return "".join(parts)


def export_html(entries: Sequence[SessionEntry], title: str = TITLE) -> str:
    heading = html.escape(f"{title} Session Export")
    parts = [
        "<!DOCTYPE html>\n<html>\n<head>\n",
        f"<title>{heading}</title>\n",
        f"<style>\n{HTML_STYLE}</style>\n</head>\n<body>\n",
        f"<h1>{heading}</h1>\n",
    ]
    for i, e in enumerate(entries, start=1):
        parts.append(
            '<div class="interaction">\n'
            f"<h2>Interaction {i}</h2>\n"
            f'<div class="timestamp">Timestamp: {_stamp(e)} | Provider: {html.escape(e.provider)}</div>\n'
            f'<div class="prompt"><strong>User:</strong><br>{html.escape(e.user_prompt)}</div>\n'
            f'<div class="response"><strong>AI:</strong><br>{html.escape(e.ai_response)}</div>\n'
            "</div>\n"
        )
    parts.append("</body>\n</html>")
    return "".join(parts)


EXPORTERS: dict[str, Callable[..., str]] = {
    "md":   export_markdown,
    "json": export_json,
    "txt":  export_text,
    "html": export_html,
}


def render_export(entries: Sequence[SessionEntry], fmt: str = "md", title: str = TITLE) -> str:
    """Render entries in the given format. Raises ValueError for unknown formats."""
    exporter = EXPORTERS.get(fmt)
    if exporter is None:
        raise ValueError(f"Unknown export format '{fmt}'; expected one of {', '.join(EXPORTERS)}")
    return exporter(entries, title)


def write_export(
    entries: Sequence[SessionEntry],
    output_dir: Path,
    fmt: str = "md",
    name: str = "session",
    title: str = TITLE,
    ) -> Path:
    """Write an export file named <slug(name)>.<fmt> under output_dir. Returns its path."""
    content = render_export(entries, fmt, title)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{slugify(name) or 'session'}.{fmt}"
    path.write_text(content, encoding='utf-8')
    return path
