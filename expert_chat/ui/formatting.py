"""Markdown to HTML for chat bubbles.

Covers what the expert prompts ask the model to produce: headings, bold,
italic, inline and fenced code, links, bullet and numbered lists, and
horizontal rules.
"""

import re

_HEADING_CLASSES = {
    1: "text-lg font-semibold mt-3 mb-1",
    2: "text-base font-semibold mt-3 mb-1",
    3: "text-sm font-semibold mt-2 mb-1",
    4: "text-sm font-medium mt-2 mb-1",
}


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _inline(text: str) -> str:
    """Apply inline markup: code, bold, italic, links."""
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)
    text = re.sub(r"(?<![\w*])\*([^*\n]+)\*(?!\w)", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"<em>\1</em>", text)
    text = re.sub(
        r"\[([^\]]+)\]\(([^)]+)\)",
        r'<a href="\2" class="text-blue-600 underline" target="_blank">\1</a>',
        text,
    )
    return text


def _wrap_lists(lines: list[str], pattern: str, tag: str, css: str) -> list[str]:
    result = []
    in_list = False
    for line in lines:
        stripped = line.strip()
        if re.match(pattern, stripped):
            if not in_list:
                result.append(f'<{tag} class="{css}">')
                in_list = True
            result.append(f"<li>{re.sub(pattern, '', stripped)}</li>")
        else:
            if in_list:
                result.append(f"</{tag}>")
                in_list = False
            result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return result


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display."""
    text = _escape(text)

    # Pull fenced code out first so nothing inside it is rewritten
    blocks: list[str] = []

    def stash(match: re.Match) -> str:
        blocks.append(
            '<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs">'
            f"<code>{match.group(2)}</code></pre>"
        )
        return f"\x00{len(blocks) - 1}\x00"

    text = re.sub(r"```(\w*)\n?([\s\S]*?)```", stash, text)

    lines = []
    for line in text.split("\n"):
        heading = re.match(r"^(#{1,6})\s+(.*)$", line.strip())
        if heading:
            level = min(len(heading.group(1)), 4)
            lines.append(
                f'<div class="{_HEADING_CLASSES[level]}">{_inline(heading.group(2))}</div>'
            )
        elif re.match(r"^(-{3,}|\*{3,})$", line.strip()):
            lines.append('<hr class="my-2">')
        else:
            lines.append(_inline(line))

    lines = _wrap_lists(
        lines, r"^[-*]\s+", "ul", "list-disc list-inside my-2 space-y-1"
    )
    lines = _wrap_lists(
        lines, r"^\d+\.\s+", "ol", "list-decimal list-inside my-2 space-y-1"
    )
    text = "\n".join(lines)

    # Block elements carry their own spacing
    text = re.sub(r"(</?(?:ul|ol|li|div|hr)[^>]*>|\x00\d+\x00)\n", r"\1", text)
    text = text.replace("\n", "<br>")

    return re.sub(r"\x00(\d+)\x00", lambda m: blocks[int(m.group(1))], text)
