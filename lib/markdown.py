# =============================================================================
# lib/markdown.py - Markdown Renderer
# =============================================================================
# Converts the markdown stored in content rows into HTML in three stages:
#
#   tokenize()  - classify each source line (heading, fence, list item, ...)
#   parse()     - group line tokens into a block AST, parse inline markup
#   render()    - walk the AST and emit escaped HTML
#
# Block types: heading, paragraph, list (ordered/unordered), quote, code,
# image, horizontal rule. Inline types: text, code, strong, emphasis, link,
# image.
#
# Heading anchors are unique slugs, so the same AST also yields the
# table of contents shown next to long posts.
#
# Usage:
#   from lib.markdown import parse, render, table_of_contents
#   document = parse(post.content)
#   html = render(document)
#   toc = table_of_contents(document)
# =============================================================================

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import Union

from lib.slugs import generate_slug


# =============================================================================
# AST
# =============================================================================

@dataclass
class Text:
    value: str


@dataclass
class InlineCode:
    value: str


@dataclass
class Strong:
    children: list[Inline]


@dataclass
class Emphasis:
    children: list[Inline]


@dataclass
class Link:
    href: str
    children: list[Inline]


@dataclass
class InlineImage:
    src: str
    alt: str


Inline = Union[Text, InlineCode, Strong, Emphasis, Link, InlineImage]


@dataclass
class Heading:
    level: int
    children: list[Inline]
    anchor: str = ""


@dataclass
class Paragraph:
    children: list[Inline]


@dataclass
class ListBlock:
    ordered: bool
    items: list[list[Inline]] = field(default_factory=list)


@dataclass
class Quote:
    children: list[Block]


@dataclass
class CodeBlock:
    code: str
    language: str = ""


@dataclass
class Figure:
    src: str
    alt: str


@dataclass
class Rule:
    pass


Block = Union[Heading, Paragraph, ListBlock, Quote, CodeBlock, Figure, Rule]


@dataclass
class Document:
    children: list[Block] = field(default_factory=list)


@dataclass(frozen=True)
class TocEntry:
    id: str
    text: str
    level: int


# =============================================================================
# Tokenizer
# =============================================================================

@dataclass
class LineToken:
    """One classified source line."""
    kind: str  # blank | heading | rule | fence | quote | ulist | olist | image | text
    content: str
    raw: str
    level: int = 0


_HEADING = re.compile(r"^(#{1,6})\s+(.+?)(?:\s+#+)?\s*$")
_RULE = re.compile(r"^\s*(?:-{3,}|\*{3,}|_{3,})\s*$")
_FENCE = re.compile(r"^\s*```\s*([\w+-]*)\s*$")
_QUOTE = re.compile(r"^\s*>\s?(.*)$")
_ULIST = re.compile(r"^\s*[-*+]\s+(.*)$")
_OLIST = re.compile(r"^\s*\d+[.)]\s+(.*)$")
_IMAGE_LINE = re.compile(r"^\s*!\[([^\]]*)\]\(([^)\s]+)\)\s*$")


def tokenize(source: str) -> list[LineToken]:
    """Classify every line of `source`."""
    tokens: list[LineToken] = []

    for raw in (source or "").replace("\r\n", "\n").split("\n"):
        if not raw.strip():
            tokens.append(LineToken("blank", "", raw))
        elif match := _FENCE.match(raw):
            tokens.append(LineToken("fence", match.group(1), raw))
        elif match := _HEADING.match(raw):
            tokens.append(LineToken("heading", match.group(2), raw, level=len(match.group(1))))
        elif _RULE.match(raw):
            tokens.append(LineToken("rule", "", raw))
        elif match := _QUOTE.match(raw):
            tokens.append(LineToken("quote", match.group(1), raw))
        elif match := _IMAGE_LINE.match(raw):
            tokens.append(LineToken("image", match.group(1), raw))
        elif match := _ULIST.match(raw):
            tokens.append(LineToken("ulist", match.group(1), raw))
        elif match := _OLIST.match(raw):
            tokens.append(LineToken("olist", match.group(1), raw))
        else:
            tokens.append(LineToken("text", raw.strip(), raw))

    return tokens


# =============================================================================
# Parser
# =============================================================================

_INLINE = re.compile(
    r"(?P<code>`+)(?P<code_body>.+?)(?P=code)"
    r"|!\[(?P<img_alt>[^\]]*)\]\((?P<img_src>[^)\s]+)\)"
    r"|\[(?P<link_text>[^\]]+)\]\((?P<link_href>[^)\s]+)\)"
    r"|\*\*(?P<strong_star>.+?)\*\*"
    r"|(?<!\w)__(?P<strong_under>.+?)__(?!\w)"
    r"|\*(?P<em_star>[^*]+?)\*"
    r"|(?<!\w)_(?P<em_under>[^_]+?)_(?!\w)"
)


def parse_inline(text: str) -> list[Inline]:
    """Split a run of text into inline nodes, left to right."""
    nodes: list[Inline] = []
    position = 0

    for match in _INLINE.finditer(text):
        if match.start() > position:
            nodes.append(Text(text[position:match.start()]))

        if match.group("code") is not None:
            nodes.append(InlineCode(match.group("code_body").strip()))
        elif match.group("img_src") is not None:
            nodes.append(InlineImage(match.group("img_src"), match.group("img_alt")))
        elif match.group("link_href") is not None:
            nodes.append(Link(match.group("link_href"), parse_inline(match.group("link_text"))))
        elif match.group("strong_star") is not None or match.group("strong_under") is not None:
            body = match.group("strong_star") or match.group("strong_under")
            nodes.append(Strong(parse_inline(body)))
        else:
            body = match.group("em_star") or match.group("em_under")
            nodes.append(Emphasis(parse_inline(body)))

        position = match.end()

    if position < len(text):
        nodes.append(Text(text[position:]))
    return nodes


def _plain_text(nodes: list[Inline]) -> str:
    parts = []
    for node in nodes:
        if isinstance(node, (Text, InlineCode)):
            parts.append(node.value)
        elif isinstance(node, InlineImage):
            parts.append(node.alt)
        else:
            parts.append(_plain_text(node.children))
    return "".join(parts)


def _parse_blocks(tokens: list[LineToken]) -> list[Block]:
    blocks: list[Block] = []
    i = 0

    while i < len(tokens):
        token = tokens[i]

        if token.kind == "blank":
            i += 1

        elif token.kind == "fence":
            # Everything up to the closing fence is literal, whatever it looks like
            lines = []
            i += 1
            while i < len(tokens) and tokens[i].kind != "fence":
                lines.append(tokens[i].raw)
                i += 1
            i += 1  # closing fence (or end of input)
            blocks.append(CodeBlock("\n".join(lines), token.content))

        elif token.kind == "heading":
            blocks.append(Heading(token.level, parse_inline(token.content)))
            i += 1

        elif token.kind == "rule":
            blocks.append(Rule())
            i += 1

        elif token.kind == "image":
            match = _IMAGE_LINE.match(token.raw)
            blocks.append(Figure(match.group(2), match.group(1)))
            i += 1

        elif token.kind == "quote":
            inner = []
            while i < len(tokens) and tokens[i].kind == "quote":
                inner.append(tokens[i].content)
                i += 1
            blocks.append(Quote(_parse_blocks(tokenize("\n".join(inner)))))

        elif token.kind in ("ulist", "olist"):
            listing = ListBlock(ordered=token.kind == "olist")
            while i < len(tokens) and tokens[i].kind == token.kind:
                listing.items.append(parse_inline(tokens[i].content))
                i += 1
            blocks.append(listing)

        else:
            lines = []
            while i < len(tokens) and tokens[i].kind == "text":
                lines.append(tokens[i].content)
                i += 1
            blocks.append(Paragraph(parse_inline("\n".join(lines))))

    return blocks


def parse(source: str) -> Document:
    """Parse markdown into a Document and assign unique heading anchors."""
    document = Document(_parse_blocks(tokenize(source)))

    used: set[str] = set()
    for block in _walk_blocks(document.children):
        if isinstance(block, Heading):
            base = generate_slug(_plain_text(block.children)) or "section"
            anchor, counter = base, 1
            while anchor in used:
                anchor = f"{base}-{counter}"
                counter += 1
            used.add(anchor)
            block.anchor = anchor

    return document


def _walk_blocks(blocks: list[Block]):
    for block in blocks:
        yield block
        if isinstance(block, Quote):
            yield from _walk_blocks(block.children)


def table_of_contents(document: Document, min_level: int = 2, max_level: int = 3) -> list[TocEntry]:
    """Headings between `min_level` and `max_level`, in document order."""
    return [
        TocEntry(block.anchor, _plain_text(block.children), block.level)
        for block in _walk_blocks(document.children)
        if isinstance(block, Heading) and min_level <= block.level <= max_level
    ]


# =============================================================================
# Renderer
# =============================================================================

_SAFE_SCHEMES = ("http://", "https://", "mailto:", "/", "#")


def is_safe_url(url: str) -> bool:
    """Relative links and http(s)/mailto only; javascript: and friends are not."""
    return url.lower().startswith(_SAFE_SCHEMES) or ":" not in url


def _safe_url(url: str) -> str:
    if is_safe_url(url):
        return html.escape(url, quote=True)
    return "#"


def _render_inline(nodes: list[Inline]) -> str:
    out = []
    for node in nodes:
        if isinstance(node, Text):
            out.append(html.escape(node.value, quote=False))
        elif isinstance(node, InlineCode):
            out.append(f"<code>{html.escape(node.value, quote=False)}</code>")
        elif isinstance(node, Strong):
            out.append(f"<strong>{_render_inline(node.children)}</strong>")
        elif isinstance(node, Emphasis):
            out.append(f"<em>{_render_inline(node.children)}</em>")
        elif isinstance(node, Link):
            external = node.href.startswith(("http://", "https://"))
            rel = ' target="_blank" rel="noopener noreferrer"' if external else ""
            out.append(f'<a href="{_safe_url(node.href)}"{rel}>{_render_inline(node.children)}</a>')
        elif isinstance(node, InlineImage):
            out.append(f'<img src="{_safe_url(node.src)}" alt="{html.escape(node.alt)}" loading="lazy">')
    return "".join(out)


def _render_block(block: Block) -> str:
    if isinstance(block, Heading):
        return f'<h{block.level} id="{block.anchor}">{_render_inline(block.children)}</h{block.level}>'
    if isinstance(block, Paragraph):
        return f"<p>{_render_inline(block.children)}</p>"
    if isinstance(block, ListBlock):
        tag = "ol" if block.ordered else "ul"
        items = "".join(f"<li>{_render_inline(item)}</li>" for item in block.items)
        return f"<{tag}>{items}</{tag}>"
    if isinstance(block, Quote):
        return f"<blockquote>{''.join(_render_block(child) for child in block.children)}</blockquote>"
    if isinstance(block, CodeBlock):
        language = f' class="language-{html.escape(block.language)}"' if block.language else ""
        return f"<pre><code{language}>{html.escape(block.code, quote=False)}</code></pre>"
    if isinstance(block, Figure):
        alt = html.escape(block.alt)
        caption = f"<figcaption>{alt}</figcaption>" if block.alt else ""
        return f'<figure><img src="{_safe_url(block.src)}" alt="{alt}" loading="lazy">{caption}</figure>'
    return "<hr>"


def render(document: Document) -> str:
    """Render a parsed Document to HTML."""
    return "\n".join(_render_block(block) for block in document.children)


def to_html(source: str) -> str:
    """Parse and render in one step."""
    return render(parse(source))
